import hmac

from flask import Blueprint, Response, current_app, jsonify, request
from prometheus_client import REGISTRY, generate_latest, CONTENT_TYPE_LATEST

admin_bp = Blueprint("admin", __name__)


def _authorized() -> bool:
    token = current_app.config["CHECKOUT_SETTINGS"].metrics_token
    if not token:
        return True
    header = request.headers.get("Authorization", "")
    scheme, _, candidate = header.partition(" ")
    return scheme.lower() == "bearer" and hmac.compare_digest(candidate.strip(), token)


@admin_bp.get("/admin/metrics")
def metrics():
    """Prometheus metrics endpoint. Requires METRICS_TOKEN as a bearer token when set."""
    if not _authorized():
        return jsonify({"error": "unauthorized"}), 401
    return Response(
        generate_latest(REGISTRY),
        mimetype=CONTENT_TYPE_LATEST,
    )
