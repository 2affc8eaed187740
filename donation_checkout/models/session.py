from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class SessionRequest:
    """Everything the payment provider needs to open one hosted checkout."""

    currency: str
    unit_amount: int
    product_name: str
    customer_email: str
    success_url: str
    cancel_url: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def to_stripe_params(self) -> Dict[str, Any]:
        return {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "product_data": {"name": self.product_name},
                        "unit_amount": self.unit_amount,
                    },
                    "quantity": 1,
                }
            ],
            "customer_email": self.customer_email,
            "metadata": dict(self.metadata),
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
        }


@dataclass(frozen=True)
class SessionResult:
    session_id: str
    url: str
