"""Pytest fixtures for the checkout app and handler."""

import pytest

from donation_checkout import create_app
from donation_checkout.config import CheckoutSettings
from donation_checkout.errors import ProviderError
from donation_checkout.models.session import SessionResult
from donation_checkout.services.checkout_service import CheckoutHandler
from donation_checkout.services.payment_provider import CheckoutProvider
from donation_checkout.utils import rate_limit


class RecordingProvider(CheckoutProvider):
    """Stands in for Stripe; remembers every SessionRequest it receives."""

    def __init__(self, url="https://checkout.stripe.com/c/pay/cs_test_123", error=None):
        self.url = url
        self.error = error
        self.requests = []

    def create_session(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return SessionResult(session_id=f"cs_test_{len(self.requests)}", url=self.url)


@pytest.fixture(autouse=True)
def _reset_rate_limit():
    rate_limit.reset()
    yield
    rate_limit.reset()


@pytest.fixture
def settings(tmp_path):
    # campaign file points at a path that does not exist unless a test writes it
    return CheckoutSettings(
        stripe_secret_key="sk_test_dummy",
        campaign_file=str(tmp_path / "campaign.json"),
    )


@pytest.fixture
def provider_factory():
    return RecordingProvider


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def failing_provider():
    return RecordingProvider(error=ProviderError("card_error: sk_test_dummy leaked?"))


@pytest.fixture
def handler(settings, provider):
    return CheckoutHandler(settings=settings, provider=provider)


@pytest.fixture
def app(settings, provider):
    return create_app(settings=settings, provider=provider)


@pytest.fixture
def client(app):
    return app.test_client()
