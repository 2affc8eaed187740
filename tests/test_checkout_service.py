import json
import logging

import pytest

from donation_checkout.config import CheckoutSettings
from donation_checkout.errors import GENERIC_PROVIDER_MESSAGE
from donation_checkout.services.checkout_service import CheckoutEvent, CheckoutHandler


def _post(body, headers=None):
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    return CheckoutEvent(method="POST", headers=headers or {}, body=body)


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"])
def test_non_post_is_405(handler, provider, method):
    resp = handler.handle(CheckoutEvent(method=method, body='{"email": "a@b.com", "amount": 5}'))
    assert resp.status_code == 405
    assert resp.body == "Method Not Allowed"
    assert resp.headers["Allow"] == "POST"
    assert provider.requests == []


@pytest.mark.parametrize("body", ["{", "not json", b"\xff\xfe\x00", "{'email': 'a@b.com'}"])
def test_malformed_json_is_400(handler, body):
    resp = handler.handle(_post(body))
    assert resp.status_code == 400
    assert resp.body == "Invalid JSON body"
    assert resp.headers["Content-Type"].startswith("text/plain")


@pytest.mark.parametrize("body", [None, "", b""])
def test_empty_body_reports_missing_email(handler, body):
    resp = handler.handle(CheckoutEvent(method="POST", body=body))
    assert resp.status_code == 400
    assert resp.body == "Email is required"


def test_non_object_json_reports_missing_email(handler):
    resp = handler.handle(_post("[1, 2, 3]"))
    assert resp.status_code == 400
    assert resp.body == "Email is required"


def test_invalid_amount_is_400(handler, provider):
    resp = handler.handle(_post({"email": "a@b.com", "amount": -3}))
    assert resp.status_code == 400
    assert resp.body == "Invalid amount"
    assert provider.requests == []


def test_defaults_scenario(handler, provider):
    resp = handler.handle(_post({"email": "a@b.com", "amount": 25}))

    assert resp.status_code == 200
    assert resp.headers["Content-Type"] == "application/json"
    assert json.loads(resp.body) == {"url": provider.url}

    (sent,) = provider.requests
    assert sent.currency == "inr"
    assert sent.unit_amount == 2500
    assert sent.product_name == "Donation"
    assert sent.customer_email == "a@b.com"
    assert sent.metadata == {"donor_name": "", "source": "onepage-site"}


def test_amount_500_becomes_50000_minor_units(handler, provider):
    handler.handle(_post({"name": "Asha", "email": "a@b.com", "amount": 500}))
    assert provider.requests[0].unit_amount == 50000
    assert provider.requests[0].metadata["donor_name"] == "Asha"


def test_campaign_label_is_used(settings, provider, tmp_path):
    (tmp_path / "campaign.json").write_text(
        json.dumps({"campaignTitle": "Help Kids", "organizationName": "ACME"}), encoding="utf-8"
    )
    handler = CheckoutHandler(settings=settings, provider=provider)
    handler.handle(_post({"email": "a@b.com", "amount": 10}))
    assert provider.requests[0].product_name == "Help Kids — ACME"


def test_label_loader_can_be_injected(settings, provider):
    handler = CheckoutHandler(
        settings=settings, provider=provider, campaign_label_loader=lambda path: None
    )
    handler.handle(_post({"email": "a@b.com", "amount": 10}))
    assert provider.requests[0].product_name == "Donation"


def test_configured_default_currency(tmp_path, provider):
    settings = CheckoutSettings(
        stripe_secret_key="sk_test_dummy",
        default_currency="usd",
        campaign_file=str(tmp_path / "none.json"),
    )
    handler = CheckoutHandler(settings=settings, provider=provider)
    handler.handle(_post({"email": "a@b.com", "amount": 10}))
    handler.handle(_post({"email": "a@b.com", "amount": 10, "currency": "GBP"}))
    assert [r.currency for r in provider.requests] == ["usd", "gbp"]


def test_redirect_urls_use_forwarded_headers(handler, provider):
    headers = {"X-Forwarded-Proto": "http", "X-Forwarded-Host": "give.example.org", "Host": "internal:9000"}
    handler.handle(_post({"email": "a@b.com", "amount": 10}, headers))
    sent = provider.requests[0]
    assert sent.success_url == "http://give.example.org/success.html?session_id={CHECKOUT_SESSION_ID}"
    assert sent.cancel_url == "http://give.example.org/"


def test_redirect_urls_fall_back_to_host_then_default(handler, provider):
    handler.handle(_post({"email": "a@b.com", "amount": 10}, {"host": "site.test"}))
    handler.handle(_post({"email": "a@b.com", "amount": 10}))
    assert provider.requests[0].cancel_url == "https://site.test/"
    assert provider.requests[1].cancel_url == "https://localhost:8888/"


def test_provider_error_is_500_without_detail(settings, failing_provider, caplog):
    handler = CheckoutHandler(settings=settings, provider=failing_provider)
    with caplog.at_level(logging.ERROR, logger="donation_checkout.services.checkout_service"):
        resp = handler.handle(_post({"email": "a@b.com", "amount": 10}))

    assert resp.status_code == 500
    assert resp.body == GENERIC_PROVIDER_MESSAGE
    assert "sk_test_dummy" not in resp.body
    assert "card_error" in caplog.text


def test_unexpected_provider_exception_is_500(settings, provider_factory):
    provider = provider_factory(error=ConnectionError("connection reset by api.stripe.com"))
    handler = CheckoutHandler(settings=settings, provider=provider)
    resp = handler.handle(_post({"email": "a@b.com", "amount": 10}))
    assert resp.status_code == 500
    assert resp.body == GENERIC_PROVIDER_MESSAGE
    assert "connection reset" not in resp.body


def test_identical_requests_build_identical_sessions(handler, provider):
    body = {"name": "Asha", "email": "a@b.com", "amount": 12.5, "currency": "INR"}
    headers = {"x-forwarded-host": "give.example.org"}
    handler.handle(_post(body, headers))
    handler.handle(_post(body, headers))
    first, second = provider.requests
    assert first == second
    assert first.to_stripe_params() == second.to_stripe_params()


def test_event_headers_are_case_insensitive():
    event = CheckoutEvent(method="post", headers={"X-Forwarded-Host": "a.test"})
    assert event.method == "POST"
    assert event.header("x-forwarded-host") == "a.test"
    assert event.header("X-FORWARDED-HOST") == "a.test"
    assert event.header("host") is None
