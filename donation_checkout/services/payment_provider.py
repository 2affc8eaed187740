"""
Payment session providers.

CheckoutHandler only sees the CheckoutProvider interface:
- StripeCheckoutProvider creates real Stripe Checkout Sessions
- DevCheckoutProvider makes no network calls and returns a fake session that
  redirects straight to the success page (CHECKOUT_DEV_MODE=1)
"""

from __future__ import annotations
import logging
import uuid
from abc import ABC, abstractmethod

import stripe

from donation_checkout.config import CheckoutSettings
from donation_checkout.errors import ProviderError
from donation_checkout.models.session import SessionRequest, SessionResult

logger = logging.getLogger(__name__)

SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class CheckoutProvider(ABC):
    @abstractmethod
    def create_session(self, request: SessionRequest) -> SessionResult:
        """Create a hosted checkout session. Raises ProviderError on failure."""


class StripeCheckoutProvider(CheckoutProvider):
    def __init__(self, secret_key: str):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key

    def create_session(self, request: SessionRequest) -> SessionResult:
        try:
            # api_key per call; never touch the global stripe.api_key
            session = stripe.checkout.Session.create(
                api_key=self._secret_key, **request.to_stripe_params()
            )
        except stripe.StripeError as e:
            raise ProviderError(f"{type(e).__name__}: {e.user_message or e}") from e

        url = getattr(session, "url", None)
        if not url:
            raise ProviderError(f"Stripe session {session.id} has no redirect url")
        return SessionResult(session_id=session.id, url=url)


class DevCheckoutProvider(CheckoutProvider):
    def create_session(self, request: SessionRequest) -> SessionResult:
        session_id = f"cs_test_dev_{uuid.uuid4().hex}"
        url = request.success_url.replace(SESSION_ID_PLACEHOLDER, session_id)
        logger.info("[dev] fake checkout session %s", session_id)
        return SessionResult(session_id=session_id, url=url)


def build_provider(settings: CheckoutSettings) -> CheckoutProvider:
    if settings.dev_mode:
        logger.warning("CHECKOUT_DEV_MODE=1: Stripe is disabled, sessions are fake")
        return DevCheckoutProvider()
    return StripeCheckoutProvider(settings.stripe_secret_key)
