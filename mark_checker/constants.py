"""
Engine Constants

Word lists and fixed strings used by the heuristic assessment engine.
"""

# Environment variable names
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LEXICON_PATH = "LEXICON_PATH"

# Response envelope values
PROVIDER_LOCAL = "local"
MODEL_HEURISTIC = "heuristic"
ANALYSIS_TYPE_LOCAL = "Document Content Grading (local heuristic)"
LOCAL_ANALYSIS_NOTE = (
    "Local analysis used (no API key). Heuristic evaluation provided for practice."
)
NO_TEXT_ERROR = "No readable text content found in the file"

# Letter grade thresholds, checked in order
GRADE_THRESHOLDS = [(85, "A"), (70, "B"), (60, "C"), (50, "D")]
FAILING_GRADE = "E"

# Content length bands: (inclusive upper word bound, score)
LENGTH_BANDS = [(49, 2), (120, 8), (300, 10)]
LENGTH_OVERFLOW_SCORE = 6

# Spelling
COMMON_MISSPELLINGS = {
    "recieve": "receive",
    "occured": "occurred",
    "seperate": "separate",
    "definitly": "definitely",
    "goverment": "government",
    "beleive": "believe",
    "enviroment": "environment",
    "untill": "until",
    "wich": "which",
    "alot": "a lot",
    "tommorow": "tomorrow",
    "accomodate": "accommodate",
    "acheive": "achieve",
    "begining": "beginning",
    "calender": "calendar",
    "neccessary": "necessary",
    "occassion": "occasion",
    "publically": "publicly",
    "wierd": "weird",
    "freind": "friend",
}

CONTRACTIONS = {
    "ain't", "aren't", "can't", "couldn't", "didn't", "doesn't", "don't",
    "hadn't", "hasn't", "haven't", "he'd", "he'll", "he's", "i'd", "i'll",
    "i'm", "i've", "isn't", "it'd", "it'll", "it's", "let's", "mightn't",
    "mustn't", "shan't", "she'd", "she'll", "she's", "shouldn't", "that's",
    "there's", "they'd", "they'll", "they're", "they've", "wasn't", "we'd",
    "we'll", "we're", "we've", "weren't", "what's", "where's", "who's",
    "won't", "wouldn't", "you'd", "you'll", "you're", "you've", "y'all",
}

# Grammar
AUXILIARY_VERBS = {
    "am", "is", "are", "was", "were", "be", "been", "being",
    "do", "does", "did", "has", "have", "had",
    "can", "could", "will", "would", "shall", "should", "may", "might", "must",
}

PRESENT_AUXILIARIES = {"am", "is", "are", "do", "does", "has", "have"}

THIRD_PERSON_PRONOUNS = {"he", "she", "it"}

# Punctuation
MISSING_APOSTROPHES = {
    "dont": "don't",
    "cant": "can't",
    "wont": "won't",
    "isnt": "isn't",
    "didnt": "didn't",
    "doesnt": "doesn't",
    "wasnt": "wasn't",
    "couldnt": "couldn't",
    "shouldnt": "shouldn't",
    "wouldnt": "wouldn't",
    "im": "I'm",
    "ive": "I've",
    "youre": "you're",
    "theyre": "they're",
    "thats": "that's",
}

INFORMAL_CONTRACTIONS = {
    "gonna": "going to",
    "wanna": "want to",
    "gotta": "have to",
    "kinda": "kind of",
    "sorta": "sort of",
    "ain't": "is not",
    "y'all": "you all",
    "lemme": "let me",
    "gimme": "give me",
}

# Vocabulary
FILLER_WORDS = {
    "very", "really", "basically", "actually", "literally", "stuff",
    "things", "thing", "totally", "lots", "nice", "somehow", "whatever",
    "anyway", "kinda", "sorta",
}

TRANSITION_PHRASES = [
    "however", "therefore", "moreover", "furthermore", "consequently",
    "in addition", "for example", "for instance", "on the other hand",
    "in contrast", "as a result", "nevertheless", "meanwhile", "similarly",
    "in conclusion", "finally", "first", "second", "additionally", "thus",
]

STOPWORDS = {
    "a", "an", "the", "and", "or", "but", "if", "so", "of", "in", "on",
    "at", "to", "for", "from", "by", "with", "about", "as", "into", "than",
    "that", "this", "these", "those", "it", "its", "is", "are", "was",
    "were", "be", "been", "being", "am", "do", "does", "did", "has", "have",
    "had", "i", "me", "my", "we", "our", "you", "your", "he", "him", "his",
    "she", "her", "they", "them", "their", "there", "what", "which", "who",
    "when", "where", "how", "why", "not", "no", "can", "could", "will",
    "would", "should", "may", "might", "must", "also", "all", "any", "each",
    "some", "such", "very", "just", "more", "most", "other", "out", "up",
    "then", "too", "one", "own", "same", "only", "both", "through",
}
