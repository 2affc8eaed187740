from flask import Blueprint, Response, current_app, request
from werkzeug.exceptions import MethodNotAllowed

from donation_checkout.errors import MethodNotAllowed as CheckoutMethodNotAllowed
from donation_checkout.services.checkout_service import CheckoutEvent, CheckoutResponse
from donation_checkout.utils.metrics import record_outcome
from donation_checkout.utils.rate_limit import checkout_rate_limit

checkout_bp = Blueprint("checkout", __name__)

CHECKOUT_PATHS = (
    "/api/create-checkout-session",
    "/.netlify/functions/create-checkout-session",
)

# Every method is routed here so the handler itself answers 405 for non-POST.
_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@checkout_bp.route(CHECKOUT_PATHS[0], methods=_ALL_METHODS, provide_automatic_options=False)
@checkout_bp.route(CHECKOUT_PATHS[1], methods=_ALL_METHODS, provide_automatic_options=False)
@checkout_rate_limit
def create_checkout_session():
    """Create a hosted checkout session and return {"url": ...}."""
    event = CheckoutEvent(
        method=request.method,
        headers=dict(request.headers),
        body=request.get_data(cache=False),
    )
    resp = current_app.extensions["checkout_handler"].handle(event)
    return Response(resp.body, status=resp.status_code, headers=resp.headers)


@checkout_bp.app_errorhandler(MethodNotAllowed)
def method_not_allowed(e):
    # routing fails before the view runs (TRACE, PROPFIND, ...); answer in plain text
    if request.path.rstrip("/") in CHECKOUT_PATHS:
        allow = "POST"
        record_outcome(405)
    else:
        allow = ", ".join(sorted(e.valid_methods or []))
    resp = CheckoutResponse.text(CheckoutMethodNotAllowed.message, 405)
    resp.headers["Allow"] = allow
    return Response(resp.body, status=resp.status_code, headers=resp.headers)
