"""City value sanitizing.

A "City:" or "Location:" label in a ticket email often matches legal or
instructional boilerplate instead of a place. Values that read like sentences
are rejected; a trailing city-shaped word is salvaged when there is one.
"""

import re

# Signs that a label value is a sentence rather than a place name
SENTENCE_PHRASES_RE = re.compile(
    r"\b(?:you|can|so that|at any|when logged|please|click)\b",
    re.IGNORECASE,
)
URL_RE = re.compile(r"https?://|www\.", re.IGNORECASE)

# Up to three words of letters, hyphens, apostrophes and periods
SHORT_CITY_RE = re.compile(r"^[^\W\d_][\w'.-]*(?: [^\W\d_][\w'.-]*){0,2}$")
SHORT_CITY_MAX_LENGTH = 50

CITY_TOKEN_RE = re.compile(r"^[^\W\d_][^\W\d_'-]*(?:['-][^\W\d_]+)*$")
CITY_TOKEN_MIN_LENGTH = 2
CITY_TOKEN_MAX_LENGTH = 40

# Capitalized words that end instructional sentences but are never cities
STOPWORDS = {
    "you", "your", "we", "our", "the", "a", "an", "in", "at", "on", "to",
    "here", "there", "now", "it", "this", "please", "click", "ticket", "tickets",
    "sie", "ihr", "ihre", "hier", "bitte", "der", "die", "das",
}


def looks_like_sentence(value: str) -> bool:
    """Check for question marks, asterisks, URLs or instructional phrasing."""
    return (
        "?" in value
        or "*" in value
        or bool(URL_RE.search(value))
        or bool(SENTENCE_PHRASES_RE.search(value))
    )


def _is_short_city(value: str) -> bool:
    return (
        len(value) <= SHORT_CITY_MAX_LENGTH
        and bool(SHORT_CITY_RE.match(value))
        and not re.search(r"\d|_", value)
    )


def _is_city_token(token: str) -> bool:
    return (
        CITY_TOKEN_MIN_LENGTH <= len(token) <= CITY_TOKEN_MAX_LENGTH
        and token[0].isupper()
        and token.lower() not in STOPWORDS
        and bool(CITY_TOKEN_RE.match(token))
    )


def salvage_city_token(value: str) -> str | None:
    """Return the last city-shaped word of ``value``, if any."""
    for token in reversed(value.split()):
        token = token.strip(".,;:!()[]\"")
        if _is_city_token(token):
            return token
    return None


def sanitize_city(value: str | None) -> str | None:
    """Turn a raw city label value into a city name, or None.

    Args:
        value: Text captured after a city-like label

    Returns:
        The value itself when it is a short clean name, else the salvaged
        trailing city token, else None
    """
    if not value:
        return None

    value = re.sub(r"\s+", " ", value).strip()
    if not value:
        return None

    if not looks_like_sentence(value) and _is_short_city(value):
        return value

    return salvage_city_token(value)


def title_case_city(city: str) -> str:
    """Capitalize each whitespace-separated word and lowercase the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in city.split())
