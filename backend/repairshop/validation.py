from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from repairshop.time_utils import parse_iso_datetime


# Maximum price: $9,999,999.99 (999,999,999 cents)
MAX_PRICE_CENTS = 999_999_999

# Quantities beyond this are data-entry mistakes, not stock.
MAX_QUANTITY = 1_000_000


class ValidationError(ValueError):
    """400-level input problem, raised before the data store is touched."""


@dataclass(frozen=True)
class FormPolicy:
    """
    What a client form may submit:
    - writable_fields: keys accepted from the payload (anything else is rejected)
    - required: keys that must be present and non-blank
    - text_fields: keys stored as text; numbers are converted with str(),
      other JSON types are rejected
    """
    writable_fields: frozenset[str]
    required: frozenset[str] = field(default_factory=frozenset)
    text_fields: frozenset[str] = field(default_factory=frozenset)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple)) and not value:
        return True
    return False


def _coerce_text(key: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    # Phone numbers and model names often arrive as JSON numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(f"{key} must be a string")


def validate_form(payload: Any, policy: FormPolicy) -> dict:
    """
    Check a JSON payload against a FormPolicy.

    Text fields always come back as str or None. Strings are stripped;
    blank strings become None. Other values are left as submitted; use the
    parse_* helpers for coercion.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    for key in payload:
        if key not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {key}")

    cleaned: dict = {}
    for key, raw in payload.items():
        if key in policy.text_fields:
            raw = _coerce_text(key, raw)
        if isinstance(raw, str):
            raw = raw.strip() or None
        cleaned[key] = raw

    missing = sorted(k for k in policy.required if _is_blank(cleaned.get(k)))
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    return cleaned


def parse_int(value: Any, field_name: str, *, minimum: int | None = None, maximum: int = MAX_QUANTITY) -> int:
    """
    Strict integer parsing for quantity-style fields.

    Accepts ints and plain digit strings with an optional sign. Rejects
    floats, decimals, scientific notation and booleans.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field_name} must be an integer")
        if "e" in stripped.lower():
            raise ValidationError(f"{field_name} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise ValidationError(f"{field_name} must be an integer (no decimals)")
        if "_" in stripped:
            raise ValidationError(f"{field_name} must be a plain integer (no digit separators)")
        try:
            result = int(stripped)
        except ValueError:
            raise ValidationError(f"{field_name} must be an integer") from None
    elif isinstance(value, float):
        raise ValidationError(f"{field_name} must be an integer, not a decimal")
    else:
        raise ValidationError(f"{field_name} must be an integer")

    if minimum is not None and result < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    if abs(result) > maximum:
        raise ValidationError(f"{field_name} is out of range")
    return result


def parse_money_cents(value: Any, field_name: str) -> int:
    """
    Parse a user-entered amount ("89.99", 89.99, "$1,250") into integer cents.

    Amounts are rounded half-up to the cent and must be between 0 and
    MAX_PRICE_CENTS.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, str):
        text = value.strip().replace(",", "").lstrip("$")
        if not text:
            raise ValidationError(f"{field_name} must be a number")
    elif isinstance(value, (int, float)):
        text = str(value)
    else:
        raise ValidationError(f"{field_name} must be a number")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number") from None
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    # Compare before scaling: huge exponents overflow the decimal context
    if amount > Decimal(MAX_PRICE_CENTS) / 100:
        raise ValidationError(f"{field_name} cannot exceed {MAX_PRICE_CENTS} cents (${MAX_PRICE_CENTS / 100:,.2f})")

    cents = int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if cents > MAX_PRICE_CENTS:
        raise ValidationError(f"{field_name} cannot exceed {MAX_PRICE_CENTS} cents (${MAX_PRICE_CENTS / 100:,.2f})")
    return cents


def parse_optional_datetime(value: Any, field_name: str) -> datetime | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be an ISO-8601 datetime")
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO-8601 datetime") from None


def parse_issues(value: Any) -> list[str]:
    """
    Repair issues: a list of descriptions (or one string). Blank entries are
    dropped; at least one must remain.
    """
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValidationError("issues must be a list of strings")

    issues = []
    for entry in value:
        if not isinstance(entry, str):
            raise ValidationError("issues must be a list of strings")
        if entry.strip():
            issues.append(entry.strip())
    if not issues:
        raise ValidationError("At least one issue is required")
    return issues


def parse_bool_arg(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}
