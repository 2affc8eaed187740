"""
Checkout request handling.

CheckoutHandler.handle() is the single entry point shared by the Flask route
and the serverless adapter:

  POST {name?, email, amount, currency?}
    -> 200 {"url": <hosted checkout url>}
    -> 400 Invalid JSON body | Email is required | Invalid amount
    -> 405 Method Not Allowed
    -> 500 generic message when the payment provider fails
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from donation_checkout.config import CheckoutSettings
from donation_checkout.errors import BadRequest, CheckoutError, MethodNotAllowed, ProviderError
from donation_checkout.models.campaign import DEFAULT_PRODUCT_LABEL, load_campaign_label
from donation_checkout.models.payment_request import PaymentRequest, parse_payment_request
from donation_checkout.models.session import SessionRequest
from donation_checkout.services.payment_provider import CheckoutProvider
from donation_checkout.utils.metrics import record_amount, record_outcome
from donation_checkout.utils.origin import request_origin

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json"


@dataclass
class CheckoutEvent:
    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | str | None = None

    def __post_init__(self):
        self.method = (self.method or "").upper()
        self.headers = {str(k).lower(): v for k, v in (self.headers or {}).items()}

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


@dataclass
class CheckoutResponse:
    status_code: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def json(cls, payload: Dict[str, Any], status_code: int = 200) -> "CheckoutResponse":
        return cls(status_code, json.dumps(payload), {"Content-Type": APPLICATION_JSON})

    @classmethod
    def text(cls, message: str, status_code: int) -> "CheckoutResponse":
        return cls(status_code, message, {"Content-Type": TEXT_PLAIN})


def _decode_body(raw: bytes | str | None) -> Dict[str, Any]:
    if raw is None or raw == b"" or raw == "":
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise BadRequest("Invalid JSON body") from None
    # arrays, strings and null carry no fields
    return data if isinstance(data, dict) else {}


class CheckoutHandler:
    def __init__(
        self,
        *,
        settings: CheckoutSettings,
        provider: CheckoutProvider,
        campaign_label_loader: Callable[[str], Optional[str]] = load_campaign_label,
    ):
        self.settings = settings
        self.provider = provider
        self._load_label = campaign_label_loader

    def handle(self, event: CheckoutEvent) -> CheckoutResponse:
        try:
            response = self._handle(event)
        except CheckoutError as e:
            if isinstance(e, ProviderError):
                logger.exception("Error creating checkout session: %s", e)
            response = CheckoutResponse.text(e.message, e.status_code)
            if isinstance(e, MethodNotAllowed):
                response.headers["Allow"] = "POST"
        except Exception as e:
            logger.exception("Unexpected error creating checkout session: %s", e)
            response = CheckoutResponse.text(ProviderError.message, 500)

        record_outcome(response.status_code)
        return response

    def _handle(self, event: CheckoutEvent) -> CheckoutResponse:
        if event.method != "POST":
            raise MethodNotAllowed()

        body = _decode_body(event.body)
        payment = parse_payment_request(
            body, default_currency=self.settings.default_currency
        )
        session_request = self.build_session_request(payment, event)

        try:
            result = self.provider.create_session(session_request)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"{type(e).__name__}: {e}") from e

        logger.info(
            "Created checkout session %s (%s %s)",
            result.session_id,
            session_request.unit_amount,
            session_request.currency,
        )
        record_amount(session_request.currency, session_request.unit_amount)
        return CheckoutResponse.json({"url": result.url})

    def product_label(self) -> str:
        return self._load_label(self.settings.campaign_file) or DEFAULT_PRODUCT_LABEL

    def build_session_request(
        self, payment: PaymentRequest, event: CheckoutEvent
    ) -> SessionRequest:
        origin = request_origin(event.header, self.settings.fallback_host)
        return SessionRequest(
            currency=payment.currency,
            unit_amount=payment.unit_amount,
            product_name=self.product_label(),
            customer_email=payment.email,
            success_url=f"{origin}{self.settings.success_path}",
            cancel_url=f"{origin}{self.settings.cancel_path}",
            metadata={
                "donor_name": payment.name,
                "source": self.settings.source_tag,
            },
        )
