from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from monhub.constants import CURRENCY_SYMBOL
from monhub.schemas.user import UserRef

# fr-FR Intl separators
THOUSANDS_SEPARATOR = "\u202f"
CURRENCY_SEPARATOR = "\u00a0"


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_price(value: Optional[float]) -> str:
    """fr-FR style, e.g. 250 000 € with narrow and plain no-break spaces."""
    if value is None:
        return ""
    amount = f"{_round_half_up(value):,}".replace(",", THOUSANDS_SEPARATOR)
    return f"{amount}{CURRENCY_SEPARATOR}{CURRENCY_SYMBOL}"


def format_price_thousands(value: Optional[float]) -> str:
    """Compact admin style: €250k"""
    return f"{CURRENCY_SYMBOL}{_round_half_up((value or 0) / 1000)}k"


def format_file_size(size: Optional[int]) -> str:
    if size is None or size < 0:
        return ""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def participant_name(user: Union[UserRef, dict, str, None], default: str = "Inconnu") -> str:
    """'First Last', then email, then the default."""
    if user is None or isinstance(user, str):
        return default
    if isinstance(user, dict):
        user = UserRef.model_validate({"_id": user.get("_id", user.get("id", "")), **user})
    full_name = f"{user.first_name or ''} {user.last_name or ''}".strip()
    return full_name or user.email or default


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:] if value else value
