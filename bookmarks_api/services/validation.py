"""
Bookmarks Service — Bookmark Payload Validation
=================================================

What:  Pure functions that turn a client JSON payload into a normalized
       bookmark (create) or a partial update (patch), or raise the first
       validation error found.
How:   Fixed-order, short-circuit checks. No I/O, no logging; the bookmark
       service logs rejections.

Rules:
    Presence:  a field is missing when absent, null, or a blank string.
               `rating: 0` is present. A title is judged after sanitizing,
               so markup that sanitizes away (e.g. a lone HTML comment)
               counts as missing.
    Order:     create checks presence title → url → rating, then the rating
               value, then the url, then the text types. Patch checks
               rating, then url, then the text types.
    Rating:    coerced to a number; must be an integer in [0, 5].
               5, "5", 5.0 and "5.0" pass; "2.5", "invalid", true, -1, "6" fail.
    URL:       literal `http://` or `https://` followed by a non-empty
               authority, only RFC 3986 characters with well-formed percent
               escapes, and accepted by pydantic's HttpUrl parser.
    Text:      title and description must be JSON strings (description may
               also be null).
    Output:    only recognized fields are returned; client-supplied `id` and
               unknown keys are dropped.
"""

import re
from typing import Any, Dict, Optional

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from bookmarks_api.exceptions import (
    EmptyPatchError,
    InvalidRatingError,
    InvalidTextError,
    InvalidUrlError,
    MissingFieldError,
    ValidationError,
)
from bookmarks_api.services.sanitizer import sanitize_text

REQUIRED_FIELDS = ("title", "url", "rating")

MIN_RATING = 0
MAX_RATING = 5

_HTTP_URL = TypeAdapter(HttpUrl)

# scheme, "//", then at least one authority character
_WEB_URI_PREFIX = re.compile(r"^https?://[^/?#]", re.IGNORECASE)
# unreserved + reserved + "%"
_URI_CHARACTERS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _is_missing(payload: Dict[str, Any], field: str) -> bool:
    value = payload.get(field)
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    if field == "title":
        value = sanitize_text(value)
    return not value.strip()


def _require_text(value: Any, field: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise InvalidTextError(field, value)


def _ensure_object(payload: Any) -> Dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            context={"body_type": type(payload).__name__},
        )
    return payload


def coerce_rating(value: Any) -> int:
    """
    Coerce a client rating to an int in [MIN_RATING, MAX_RATING].

    Raises:
        InvalidRatingError: not numeric, not integral, or out of range
    """
    # bool is an int subclass; a JSON true is not a rating
    if isinstance(value, bool):
        raise InvalidRatingError(value)

    if isinstance(value, int):
        number = value
    elif isinstance(value, (float, str)):
        try:
            as_float = float(value.strip() if isinstance(value, str) else value)
        except ValueError:
            raise InvalidRatingError(value) from None
        # NaN and infinity are never integral
        if not as_float.is_integer():
            raise InvalidRatingError(value)
        number = int(as_float)
    else:
        raise InvalidRatingError(value)

    if not MIN_RATING <= number <= MAX_RATING:
        raise InvalidRatingError(value)
    return number


def validate_url(value: Any) -> str:
    """
    Return `value` unchanged when it is an absolute http(s) URI.

    The character and prefix checks reject anything the HTTP parser would
    silently repair (`http:host`, backslashes, spaces, quotes, angle
    brackets), so the stored URL is exactly what the client sent and never
    carries markup.

    Raises:
        InvalidUrlError: anything else
    """
    if (
        not isinstance(value, str)
        or not _WEB_URI_PREFIX.match(value)
        or not _URI_CHARACTERS.match(value)
        or _BAD_PERCENT_ESCAPE.search(value)
    ):
        raise InvalidUrlError(value)
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        raise InvalidUrlError(value) from None
    return value


def validate_create(payload: Any) -> Dict[str, Any]:
    """
    Validate a POST /bookmarks body.

    Returns:
        Exactly {title, url, description, rating}; description is passed
        through (None when absent) and rating is an int.

    Raises:
        ValidationError: body is not a JSON object
        MissingFieldError: first of title, url, rating that is missing
        InvalidRatingError: rating not an integer in 0..5
        InvalidUrlError: url not an absolute http(s) URL
        InvalidTextError: title or description not a string
    """
    data = _ensure_object(payload)

    for field in REQUIRED_FIELDS:
        if _is_missing(data, field):
            raise MissingFieldError(field)

    rating = coerce_rating(data["rating"])
    url = validate_url(data["url"])

    return {
        "title": _require_text(data["title"], "title"),
        "url": url,
        "description": _require_text(data.get("description"), "description"),
        "rating": rating,
    }


def validate_patch(payload: Any) -> Dict[str, Any]:
    """
    Validate a PATCH /bookmarks/{id} body.

    At least one of title, url, rating must be present. `description` is
    carried along when the key is in the body (null clears it) but does not
    make a patch non-empty on its own.

    Returns:
        Only the recognized fields present in the body, validated. Never
        contains `id`.

    Raises:
        ValidationError: body is not a JSON object
        EmptyPatchError: none of title, url, rating present
        InvalidRatingError / InvalidUrlError / InvalidTextError: first
        invalid field
    """
    data = _ensure_object(payload)

    present = [field for field in REQUIRED_FIELDS if not _is_missing(data, field)]
    if not present:
        raise EmptyPatchError(context={"keys": sorted(str(key) for key in data)})

    update: Dict[str, Any] = {}
    if "rating" in present:
        update["rating"] = coerce_rating(data["rating"])
    if "url" in present:
        update["url"] = validate_url(data["url"])
    if "title" in present:
        update["title"] = _require_text(data["title"], "title")
    if "description" in data:
        update["description"] = _require_text(data["description"], "description")

    return update
