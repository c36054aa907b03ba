"""Speech normalization for order matching."""
import re
from typing import List

# Words that carry no menu meaning in a spoken order
FILLER_WORDS = frozenset(
    [
        # articles
        "a", "an", "the", "some", "one",
        # pronouns
        "i", "ill", "i'll", "id", "i'd", "it", "me", "you", "my",
        # politeness
        "please",
        # order verbs
        "want", "can", "get", "have", "like", "make", "give", "order", "do",
        # fillers
        "um", "uh", "yeah", "yes", "ok", "okay", "so", "just", "also",
        # conjunctions
        "and", "with", "of",
        # prepositions
        "to", "for", "on", "in",
    ]
)

_SPEECH_DISALLOWED = re.compile(r"[^a-z0-9\s'-]")
_OPTION_DISALLOWED = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, drop punctuation other than apostrophes and hyphens, collapse whitespace."""
    cleaned = _SPEECH_DISALLOWED.sub("", text.lower())
    return _WHITESPACE.sub(" ", cleaned).strip()


def normalize(utterance: str) -> List[str]:
    """
    Turn a transcribed utterance into ordered meaningful tokens.

    Args:
        utterance: Raw speech-to-text output

    Returns:
        Tokens in spoken order with filler words removed. An empty list
        means nothing orderable was said.
    """
    cleaned = normalize_text(utterance or "")
    if not cleaned:
        return []
    return [word for word in cleaned.split(" ") if word and word not in FILLER_WORDS]


def normalize_option_name(name: str) -> str:
    """Normalize a modifier option name: lowercase letters, digits and single spaces."""
    cleaned = _OPTION_DISALLOWED.sub("", name.lower())
    return _WHITESPACE.sub(" ", cleaned).strip()
