from setuptools import setup, find_packages

setup(
    name="mark_checker",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dotenv>=1.0.1",
        "Pillow>=10.2.0",
        "pyspellchecker>=0.8.1",
        "rapidfuzz>=3.6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    python_requires=">=3.8",
    author="Mark Checker Team",
    description="Local heuristic grading of written submissions, with OCR image normalization",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
