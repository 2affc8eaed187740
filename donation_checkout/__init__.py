# donation_checkout/__init__.py
import logging

from flask import Flask

from donation_checkout.config import CheckoutSettings
from donation_checkout.routes import admin_bp, checkout_bp, core
from donation_checkout.services.checkout_service import CheckoutHandler
from donation_checkout.services.payment_provider import CheckoutProvider, build_provider

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    settings: CheckoutSettings | None = None,
    provider: CheckoutProvider | None = None,
):
    """
    Build the Flask app. Settings come from the environment unless given;
    pass a provider to replace Stripe (tests, local dev).
    """
    settings = settings or CheckoutSettings.from_env()
    if provider is None:
        settings.validate()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.url_map.strict_slashes = False
    app.config["CHECKOUT_SETTINGS"] = settings

    handler = CheckoutHandler(
        settings=settings,
        provider=provider or build_provider(settings),
    )
    app.extensions["checkout_handler"] = handler

    app.register_blueprint(core)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(admin_bp)

    logger.info(
        "checkout app ready: currency=%s campaign_file=%s dev_mode=%s",
        settings.default_currency,
        settings.campaign_file,
        settings.dev_mode,
    )
    return app
