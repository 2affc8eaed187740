"""
Netlify Functions / AWS Lambda entry point.

    handler(event, context) -> {"statusCode", "headers", "body"}

The CheckoutHandler is built from the environment on first use and reused by
warm invocations.
"""

from __future__ import annotations
import base64
import logging
from typing import Any, Dict

from donation_checkout.config import CheckoutSettings
from donation_checkout.errors import ConfigurationError, GENERIC_PROVIDER_MESSAGE
from donation_checkout.services.checkout_service import (
    CheckoutEvent,
    CheckoutHandler,
    CheckoutResponse,
)
from donation_checkout.services.payment_provider import build_provider

logger = logging.getLogger(__name__)

_handler: CheckoutHandler | None = None


def _get_handler() -> CheckoutHandler:
    global _handler
    if _handler is None:
        settings = CheckoutSettings.from_env()
        _handler = CheckoutHandler(settings=settings, provider=build_provider(settings))
    return _handler


def set_handler(handler: CheckoutHandler | None) -> None:
    """Install a prebuilt handler (or clear it so the next call rebuilds)."""
    global _handler
    _handler = handler


def _event_body(event: Dict[str, Any]) -> bytes | str | None:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except ValueError:
            # undecodable payload fails JSON parsing downstream
            return body
    return body


def _to_lambda(resp: CheckoutResponse) -> Dict[str, Any]:
    return {
        "statusCode": resp.status_code,
        "headers": dict(resp.headers),
        "body": resp.body,
    }


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    try:
        checkout = _get_handler()
    except ConfigurationError as e:
        logger.error("Checkout function is not configured: %s", e)
        return _to_lambda(CheckoutResponse.text(GENERIC_PROVIDER_MESSAGE, 500))

    method = event.get("httpMethod") or (
        (event.get("requestContext") or {}).get("http") or {}
    ).get("method", "")
    checkout_event = CheckoutEvent(
        method=method,
        headers=event.get("headers") or {},
        body=_event_body(event),
    )
    return _to_lambda(checkout.handle(checkout_event))


lambda_handler = handler
