"""Request field coercion.

Turns the untyped JSON body of a request into the typed values the ledger
core expects. Each helper raises ``ValidationError`` carrying the message
returned to the caller; routes call them in a fixed order so that the first
violated precondition wins:

1. every required text field, in the endpoint's field order
2. amount / decimals fields
3. address parsing, in field order
"""

from typing import Any, Dict, Optional

from solders.pubkey import Pubkey

from ledger.codec import decode_pubkey
from ledger.constants import U64_MAX
from ledger.errors import InvalidEncoding


class ValidationError(ValueError):
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_string(body: Dict[str, Any], name: str) -> str:
    value = body.get(name)
    if value is None:
        raise ValidationError(f"Missing required field: {name}")
    if not isinstance(value, str):
        raise ValidationError(f"Field '{name}' must be a string")
    if not value:
        raise ValidationError(f"Field '{name}' cannot be empty")
    return value


def optional_string(body: Dict[str, Any], name: str) -> Optional[str]:
    if body.get(name) is None:
        return None
    return require_string(body, name)


def require_amount(body: Dict[str, Any], name: str) -> int:
    """A strictly positive u64."""
    value = body.get(name)
    if value is None:
        raise ValidationError(f"Missing required field: {name}")
    if not _is_int(value) or value < 0 or value > U64_MAX:
        raise ValidationError(f"Field '{name}' must be an unsigned 64-bit integer")
    if value == 0:
        raise ValidationError("Amount must be greater than 0")
    return value


def require_u8(body: Dict[str, Any], name: str) -> int:
    value = body.get(name)
    if value is None:
        raise ValidationError(f"Missing required field: {name}")
    if not _is_int(value) or not 0 <= value <= 255:
        raise ValidationError(f"Field '{name}' must be an integer between 0 and 255")
    return value


def parse_pubkey(text: str, name: str) -> Pubkey:
    try:
        return decode_pubkey(text)
    except InvalidEncoding as e:
        raise ValidationError(f"Invalid '{name}' address provided") from e
