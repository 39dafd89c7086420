"""Mark Checker: local heuristic grading engine for writing submissions."""

__version__ = "0.1.0"
