"""Helpers for decoding and normalizing category labels.

Question records name their category by label (often HTML-escaped) while the
category list uses ids, so matching goes through a normalized form.
"""

import html
import re
from typing import List, Optional

_AMPERSAND = re.compile(r"\s*&\s*")
_COLON = re.compile(r"\s*:\s*")
_WHITESPACE = re.compile(r"\s+")


def decode_html_entities(text: Optional[str]) -> str:
    """Decodes entities such as `&amp;` and `&quot;`; None becomes ''."""
    if text is None:
        return ""
    return html.unescape(text)


def normalize_category_label(label: Optional[str]) -> str:
    """Normalizes a label for robust matching across sources.

    Decodes entities, drops spaces around ampersands, writes colons as ': ',
    collapses whitespace, trims and lowercases.
    """
    text = decode_html_entities(label or "")
    text = _AMPERSAND.sub("&", text)
    text = _COLON.sub(": ", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip().lower()


def category_name_keys(label: Optional[str]) -> List[str]:
    """Returns the normalized label and, when present, its child segment after the first colon.

    'Entertainment: Video Games' -> ['entertainment: video games', 'video games']
    """
    full = normalize_category_label(label)
    keys = [full]
    head, sep, tail = full.partition(":")
    if sep:
        child = tail.strip()
        if child and child not in keys:
            keys.append(child)
    return keys
