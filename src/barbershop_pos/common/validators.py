from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import AMOUNT_STEP, MAX_AMOUNT
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value.strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be an integer", field=field_name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer", field=field_name)


def to_amount(value: Any, field_name: str = "amount") -> Decimal:
    """Coerce a JSON number or numeric string into a currency Decimal."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f"{field_name} is too large", field=field_name)
    if amount != amount.quantize(AMOUNT_STEP):
        raise ValidationError(f"{field_name} cannot have more than 2 decimal places", field=field_name)
    return amount.quantize(AMOUNT_STEP)


def require_amount(value: Any, field_name: str = "amount") -> Decimal:
    amount = to_amount(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative", field=field_name)
    return amount
