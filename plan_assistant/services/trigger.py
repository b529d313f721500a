"""
Trigger detection - decides whether a message should open the questionnaire.

This is an approximate keyword gate, not a classifier: phrasings outside
TRIGGER_PHRASES are missed and unrelated sentences containing one of them
(e.g. "going to") will fire.
"""

TRIGGER_PHRASES = (
    "plan a trip",
    "travel plan",
    "going to",
    "visit",
    "trip to",
    "travel to",
    "planning to go",
    "want to travel",
    "journey to",
    "vacation to",
)


def should_start_questionnaire(text: str) -> bool:
    """True if the text contains any travel-intent phrase (case-insensitive)."""
    lowered = text.lower()
    return any(phrase in lowered for phrase in TRIGGER_PHRASES)
