"""
Bookmarks Service — Text Sanitizer
====================================

What:  Neutralizes markup in bookmark `title` and `description` so stored or
       returned text cannot execute when a client renders it.
How:   bleach's Cleaner with a small whitelist of inline formatting tags.
       Everything else is escaped (not stripped), event-handler attributes
       and non-web link protocols are dropped, comments are removed.

Examples:
    'Naughty <script>alert("xss");</script>'
        → 'Naughty &lt;script&gt;alert("xss");&lt;/script&gt;'
    '<img src="https://x.test/a.png" onerror="alert(1)"> <strong>ok</strong>'
        → '<img src="https://x.test/a.png"> <strong>ok</strong>'

Idempotent: bleach keeps existing character entities as they are, so a
sanitized value passes through a second `sanitize_text` unchanged. The
service relies on this to sanitize both before write and on every read.
"""

from typing import Optional

from bleach.sanitizer import Cleaner

ALLOWED_TAGS = frozenset(
    {
        "a",
        "abbr",
        "b",
        "br",
        "code",
        "em",
        "i",
        "img",
        "p",
        "s",
        "small",
        "strong",
        "sub",
        "sup",
        "u",
    }
)

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "abbr": ["title"],
    "img": ["src", "alt", "title"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_CLEANER = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Return `value` with unsafe markup neutralized; None passes through."""
    if value is None:
        return None
    return _CLEANER.clean(value)
