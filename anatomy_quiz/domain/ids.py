import uuid
from typing import Any


def is_valid_id(value: Any) -> bool:
    """True when value is a string that parses as a UUID."""
    if not isinstance(value, str) or not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def new_id() -> str:
    return str(uuid.uuid4())


def short_id(value: str) -> str:
    return f"{value[:6]}..."
