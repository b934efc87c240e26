"""Field rules for post payloads.

Every field is checked and every violation is collected, so a client sees
all problems at once. Within a single field the first failing rule wins.
"""
import re
from collections import namedtuple

from errors import ValidationFailed

MISSING_FIELD = "MissingField"
INVALID_TYPE = "InvalidType"
TOO_LONG = "TooLong"
UNACCEPTABLE_CONTENT = "UnacceptableContent"

TITLE_MAX_LENGTH = 25
BODY_MAX_LENGTH = 255

# Always rejected; DISALLOWED_TERMS from the environment extends this list
DEFAULT_DISALLOWED_TERMS = (
    "fuck", "fucking", "fucker", "motherfucker",
    "shit", "bullshit", "bitch", "bastard",
    "asshole", "a$$", "a$$hole", "@sshole",
    "cunt", "twat",
    "wanker", "bollocks", "slut", "whore",
)

FieldError = namedtuple("FieldError", ["field", "code", "message"])


def make_clean_check(terms):
    """Build an ``is_clean(text) -> bool`` predicate rejecting whole-token matches of ``terms``.

    A term matches only when it is not glued to other word characters, so
    terms with symbols such as ``a$$`` still match on their own.
    """
    words = [t.strip().lower() for t in terms if t and t.strip()]
    if not words:
        return lambda text: True

    pattern = re.compile(
        r"(?<!\w)(?:" + "|".join(re.escape(w) for w in words) + r")(?!\w)",
        re.IGNORECASE,
    )

    def is_clean(text):
        return pattern.search(text) is None

    return is_clean


def check_text(field, value, max_length, is_clean):
    """Return ``(normalized_value, error)``; exactly one of them is None."""
    if value is None:
        return None, FieldError(field, MISSING_FIELD, f"The {field} field is required.")
    if not isinstance(value, str):
        return None, FieldError(field, INVALID_TYPE, f"The {field} field must be a string.")

    value = value.strip()
    if not value:
        return None, FieldError(field, MISSING_FIELD, f"The {field} field is required.")
    if len(value) > max_length:
        return None, FieldError(
            field,
            TOO_LONG,
            f"The {field} field must not be greater than {max_length} characters.",
        )
    if not is_clean(value):
        return None, FieldError(
            field, UNACCEPTABLE_CONTENT, f"The {field} is not clean."
        )
    return value, None


def validate_post(payload, is_clean, title_max=TITLE_MAX_LENGTH, body_max=BODY_MAX_LENGTH):
    """Validate a ``{title, body}`` payload.

    Returns the accepted pair with surrounding whitespace stripped, or raises
    ValidationFailed listing every field error. Keys other than title and
    body are dropped, so a payload can never carry an owner.
    """
    # Configured limits may tighten the column sizes but never widen them
    title_max = min(title_max, TITLE_MAX_LENGTH)
    body_max = min(body_max, BODY_MAX_LENGTH)
    payload = payload or {}
    cleaned = {}
    errors = []

    for field, limit in (("title", title_max), ("body", body_max)):
        value, error = check_text(field, payload.get(field), limit, is_clean)
        if error is not None:
            errors.append(error)
        else:
            cleaned[field] = value

    if errors:
        raise ValidationFailed(errors)
    return cleaned
