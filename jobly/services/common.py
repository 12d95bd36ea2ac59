"""
Helpers shared by the resource services.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from jobly.core.errors import BadRequestError


def reject_fields(data: Mapping[str, Any], forbidden: Iterable[str]) -> None:
    """Fail if the payload tries to change an identity or foreign-key field."""
    present = [name for name in forbidden if name in data]
    if present:
        raise BadRequestError(f"Cannot change: {', '.join(present)}")


def validate_payload(model: Type[BaseModel], data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate data against a request schema.

    Returns the camelCase dict of the fields the caller actually sent.
    """
    try:
        parsed = model.model_validate(dict(data))
    except ValidationError as exc:
        raise BadRequestError(
            [f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in exc.errors()]
        ) from None
    return parsed.model_dump(by_alias=True, exclude_unset=True)


def equity_to_db(value: Any) -> Optional[str]:
    """Decimal equity is bound as text so no driver turns it into a float."""
    if value is None:
        return None
    return format(Decimal(str(value)), "f")


def format_equity(value: Any) -> Optional[str]:
    """Render stored equity as an exact decimal string ("0.1", never 0.1 or "0.10")."""
    if value is None:
        return None
    if isinstance(value, float):
        value = repr(value)
    text = format(Decimal(str(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def reject_nulls(changes: Mapping[str, Any], required: Iterable[str]) -> None:
    """Fail if an update would null out a required column."""
    nulled = [name for name in required if name in changes and changes[name] is None]
    if nulled:
        raise BadRequestError(f"Cannot be null: {', '.join(nulled)}")
