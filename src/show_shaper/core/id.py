"""ID Generation.

Prefixed ULID identifiers:
- Request IDs (req_*) correlate log lines for one HTTP call
- User IDs (user_*) back the mock login identity

ULIDs are lexicographically sortable, so request ids order by arrival.
"""

from typing import NewType

from ulid import ULID

RequestID = NewType("RequestID", str)
"""HTTP request identifier"""

UserID = NewType("UserID", str)
"""Mock user identity"""


class Prefix:
    """ID prefix constants."""

    REQUEST = "req"
    USER = "user"


def generate_raw() -> str:
    """Generate ULID without prefix."""
    return str(ULID())


def generate_prefixed(prefix: str) -> str:
    """Generate a `<prefix>_<ULID>` identifier."""
    return f"{prefix}_{generate_raw()}"


def new_request_id() -> RequestID:
    """Generate new request ID."""
    return RequestID(generate_prefixed(Prefix.REQUEST))


def new_user_id() -> UserID:
    """Generate new user ID."""
    return UserID(generate_prefixed(Prefix.USER))


def is_valid(id_str: str, prefix: str | None = None) -> bool:
    """
    Check that an ID is `<prefix>_<ULID>`.

    Args:
        id_str: ID string to validate
        prefix: Required prefix, or None to accept any
    """
    head, sep, body = id_str.partition("_")
    if not sep or (prefix is not None and head != prefix):
        return False
    if len(body) != 26:
        return False
    try:
        ULID.from_str(body)
    except ValueError:
        return False
    return True
