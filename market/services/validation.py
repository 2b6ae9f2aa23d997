# market/services/validation.py
import math
import re
from typing import Optional

from market.core.errors import InvalidId, ValidationFailed

_HEX_ID = re.compile(r"^[0-9a-fA-F]{32}$")


def parse_id(value: Optional[str]) -> str:
    """Validate a generated id (32 hex chars) and normalize it to lower case."""
    if value is None or not _HEX_ID.match(value.strip()):
        raise InvalidId(value or "")
    return value.strip().lower()


def parse_price(raw) -> float:
    try:
        price = float(raw)
    except (TypeError, ValueError):
        price = math.nan
    if math.isnan(price) or math.isinf(price) or price <= 0:
        raise ValidationFailed("Please enter a valid price (a positive number)", code="INVALID_PRICE")
    return price


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def require_text(value: Optional[str], field: str) -> str:
    if is_blank(value):
        raise ValidationFailed(f"{field} must not be empty")
    return value.strip()
