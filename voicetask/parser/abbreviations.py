"""
Abbreviation expansion for voice transcripts.

Speech recognizers often emit shorthand ("Dr.", "Appt.") that hides the
keywords the classifier looks for, so expansion runs before anything else.
"""
import re

# (pattern, expansion), applied in order. Each abbreviation must be followed
# by whitespace, so "Drive" or "Msg" are never touched.
ABBREVIATIONS = [
    (re.compile(r'\bDr\.?\s', re.IGNORECASE), 'Doctor '),
    (re.compile(r'\bAppt\.?\s', re.IGNORECASE), 'Appointment '),
    (re.compile(r'\bMtg\.?\s', re.IGNORECASE), 'Meeting '),
    (re.compile(r'\bPres\.?\s', re.IGNORECASE), 'Presentation '),
    (re.compile(r'\bConf\.?\s', re.IGNORECASE), 'Conference '),
    (re.compile(r'\bProf\.?\s', re.IGNORECASE), 'Professor '),
    (re.compile(r'\bMr\.?\s', re.IGNORECASE), 'Mister '),
    (re.compile(r'\bMrs\.?\s', re.IGNORECASE), 'Missus '),
    (re.compile(r'\bMs\.?\s', re.IGNORECASE), 'Miss '),
]


def expand_abbreviations(text: str) -> str:
    """Replace known abbreviations with their full words."""
    result = text
    for pattern, expansion in ABBREVIATIONS:
        result = pattern.sub(expansion, result)
    return result
