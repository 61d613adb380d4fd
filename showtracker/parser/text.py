"""Text normalization for ticket emails.

Bodies arrive either as plain text or as HTML; HTML is detected by the
presence of a ``<`` and flattened to a single whitespace-collapsed line.
"""

import html
import re

# Inputs beyond this are truncated before any pattern runs over them.
MAX_INPUT_CHARS = 100_000

TAG_RE = re.compile(r"<[^>]*>")
WHITESPACE_RE = re.compile(r"\s+")

# Characters that survive HTML mail templates and break the label patterns
ENCODING_REPLACEMENTS = {
    "\u00a0": " ",  # Non-breaking space
    "\u200b": "",  # Zero-width space
    "\u201c": '"',
    "\u201d": '"',
    "\u2018": "'",
    "\u2019": "'",
    "\u2013": "-",  # En dash
    "\u2014": "-",  # Em dash
}


def fix_encoding_artifacts(text: str) -> str:
    """Replace smart quotes, dashes and invisible spaces with ASCII."""
    if not text:
        return text

    for old, new in ENCODING_REPLACEMENTS.items():
        text = text.replace(old, new)
    return text


def strip_html(markup: str) -> str:
    """Remove tags and entities from HTML and collapse whitespace.

    Args:
        markup: HTML text

    Returns:
        Plain text on a single line
    """
    text = TAG_RE.sub(" ", markup)
    text = html.unescape(text)
    text = fix_encoding_artifacts(text)
    return WHITESPACE_RE.sub(" ", text).strip()


def normalize_body(body: str) -> str:
    """Strip markup when the body looks like HTML, else return it unchanged."""
    if "<" in body:
        return strip_html(body)
    return body


def build_search_text(subject: str, body: str) -> str:
    """Combine subject and normalized body into the text all stages search.

    The subject always sits on its own first line. Encoding artifacts are
    repaired here so that label patterns see plain spaces and quotes.
    """
    subject = (subject or "")[:MAX_INPUT_CHARS]
    body = (body or "")[:MAX_INPUT_CHARS]
    return fix_encoding_artifacts(f"{subject}\n{normalize_body(body)}")


def html_to_lines(markup: str) -> str:
    """Flatten HTML to one line per text block, keeping tag boundaries.

    Args:
        markup: HTML text

    Returns:
        Non-empty text blocks joined by newlines
    """
    text = fix_encoding_artifacts(html.unescape(TAG_RE.sub("\n", markup)))
    lines = (collapse_whitespace(line) for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def build_line_text(subject: str, body: str) -> str:
    """Like build_search_text, but an HTML body keeps one line per tag block.

    Line-anchored patterns (vendor body lines) run on this text, so text
    from a preceding element cannot bleed into a match.
    """
    subject = (subject or "")[:MAX_INPUT_CHARS]
    body = (body or "")[:MAX_INPUT_CHARS]
    lines = html_to_lines(body) if "<" in body else body
    return fix_encoding_artifacts(f"{subject}\n{lines}")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()
