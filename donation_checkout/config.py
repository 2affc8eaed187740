"""
Settings for the checkout service.

Configure via env (a local .env is loaded first):
- STRIPE_SECRET_KEY: Stripe API secret (required unless CHECKOUT_DEV_MODE=1)
- DEFAULT_CURRENCY: fallback currency code (default: inr)
- CAMPAIGN_FILE: optional campaign descriptor JSON (default: data/campaign.json)
- CHECKOUT_SOURCE_TAG, CHECKOUT_SUCCESS_PATH, CHECKOUT_CANCEL_PATH, FALLBACK_HOST
- CHECKOUT_DEV_MODE: "1" swaps Stripe for a fake provider
- RATE_LIMIT_CHECKOUT_PER_MINUTE: per-IP limit on the checkout route (0 = off)
- METRICS_TOKEN: bearer token guarding /admin/metrics
- LOG_LEVEL: root log level (default: INFO)
"""

from __future__ import annotations
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from donation_checkout.errors import ConfigurationError

DEFAULT_CURRENCY = "inr"
DEFAULT_CAMPAIGN_FILE = os.path.join("data", "campaign.json")
DEFAULT_SOURCE_TAG = "onepage-site"
DEFAULT_SUCCESS_PATH = "/success.html?session_id={CHECKOUT_SESSION_ID}"
DEFAULT_CANCEL_PATH = "/"
DEFAULT_FALLBACK_HOST = "localhost:8888"


@dataclass(frozen=True)
class CheckoutSettings:
    stripe_secret_key: str = ""
    default_currency: str = DEFAULT_CURRENCY
    campaign_file: str = DEFAULT_CAMPAIGN_FILE
    source_tag: str = DEFAULT_SOURCE_TAG
    success_path: str = DEFAULT_SUCCESS_PATH
    cancel_path: str = DEFAULT_CANCEL_PATH
    fallback_host: str = DEFAULT_FALLBACK_HOST
    dev_mode: bool = False
    rate_limit_per_minute: int = 0
    metrics_token: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, dotenv_path: str | None = ".env") -> "CheckoutSettings":
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)

        settings = cls(
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY", "").strip(),
            default_currency=(
                os.getenv("DEFAULT_CURRENCY", "").strip() or DEFAULT_CURRENCY
            ).lower(),
            campaign_file=os.getenv("CAMPAIGN_FILE", "").strip()
            or DEFAULT_CAMPAIGN_FILE,
            source_tag=os.getenv("CHECKOUT_SOURCE_TAG", "").strip()
            or DEFAULT_SOURCE_TAG,
            success_path=os.getenv("CHECKOUT_SUCCESS_PATH", "").strip()
            or DEFAULT_SUCCESS_PATH,
            cancel_path=os.getenv("CHECKOUT_CANCEL_PATH", "").strip()
            or DEFAULT_CANCEL_PATH,
            fallback_host=os.getenv("FALLBACK_HOST", "").strip()
            or DEFAULT_FALLBACK_HOST,
            dev_mode=os.getenv("CHECKOUT_DEV_MODE", "0") == "1",
            rate_limit_per_minute=_int_env("RATE_LIMIT_CHECKOUT_PER_MINUTE", 0),
            metrics_token=os.getenv("METRICS_TOKEN", "").strip(),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if not self.stripe_secret_key and not self.dev_mode:
            raise ConfigurationError(
                "STRIPE_SECRET_KEY is not set (set CHECKOUT_DEV_MODE=1 for a fake provider)"
            )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
