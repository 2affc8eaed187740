import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

from donation_checkout.errors import BadRequest


@dataclass(frozen=True)
class PaymentRequest:
    email: str
    amount: float  # major currency units, e.g. 500 means ₹500
    currency: str
    name: str = ""

    @property
    def unit_amount(self) -> int:
        return to_minor_units(self.amount)


def to_minor_units(amount: float) -> int:
    """
    Convert a major-unit amount to integer minor units, rounding half up.

    Goes through the decimal repr so 12.505 becomes 1251 rather than the
    1250 a float multiply would give.
    """
    cents = (Decimal(repr(float(amount))) * 100).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return int(cents)


def _clean_str(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def coerce_amount(value: Any) -> float:
    """
    Best-effort numeric coercion. Anything that is not a number or numeric
    string becomes NaN so the caller rejects it as an invalid amount.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return 0.0
        if "_" in raw:
            # digit separators are not part of JSON or JS numeric strings
            return math.nan
        try:
            return float(raw)
        except ValueError:
            return math.nan
    return math.nan


def parse_payment_request(
    body: Dict[str, Any], *, default_currency: str = "inr"
) -> PaymentRequest:
    """
    Validate a decoded JSON body. Raises BadRequest with the public reason.
    """
    name = _clean_str(body.get("name"))
    email = _clean_str(body.get("email"))
    amount = coerce_amount(body.get("amount"))
    currency = (_clean_str(body.get("currency")) or default_currency or "inr").lower()

    if not email:
        raise BadRequest("Email is required")
    if not math.isfinite(amount) or amount <= 0:
        raise BadRequest("Invalid amount")

    return PaymentRequest(email=email, amount=amount, currency=currency, name=name)
