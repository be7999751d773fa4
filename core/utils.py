from bson import ObjectId
from dateutil import parser as date_parser
from datetime import datetime, timezone
from typing import Any, Optional, Union
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
import math

from .errors import ValidationError

_datetime_adapter = TypeAdapter(datetime)


def to_string(id_value: Union[str, ObjectId]) -> str:
    """Convert ObjectId to string"""
    if isinstance(id_value, str):
        return id_value
    return str(id_value)


def utcnow() -> datetime:
    """Current time as naive UTC, the form stored in MongoDB"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_float(value: Any, field: str = "watts") -> float:
    """Coerce a number or numeric-looking string to a finite float"""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: expected a number")
    try:
        result = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r} is not a number")
    if not math.isfinite(result):
        raise ValidationError(f"Invalid {field}: {value!r} is not a finite number")
    return result


def to_datetime(value: Any, field: str = "timestamp") -> datetime:
    """Parse an externally supplied date representation to a naive UTC datetime.

    Accepts datetime objects, ISO 8601 strings and Unix epoch numbers, then
    falls back to dateutil for other textual forms (RFC 2822, ``2024/01/01``,
    ``January 1, 2024 00:00:00 UTC``). Values without an offset are UTC.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: expected a date")
    if isinstance(value, str):
        value = value.strip()
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError:
        parsed = None
    if parsed is None and isinstance(value, str) and value:
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError):
            parsed = None
    if parsed is None:
        raise ValidationError(f"Invalid {field}: {value!r} is not a valid date")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def optional_datetime(value: Any, field: str) -> Optional[datetime]:
    """Like to_datetime, but blank input means no bound"""
    if is_blank(value):
        return None
    return to_datetime(value, field)


def serialize_document(document: Optional[dict]) -> Optional[dict]:
    """Make a MongoDB document JSON friendly by stringifying its ObjectId"""
    if document is None:
        return None
    if "_id" in document:
        document["_id"] = to_string(document["_id"])
    return document


def describe_validation_error(error: PydanticValidationError) -> str:
    """Flatten a pydantic error into a single client-facing message"""
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(messages)
