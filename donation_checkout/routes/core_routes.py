from flask import Blueprint, current_app, jsonify

core = Blueprint("core", __name__)


@core.get("/")
def root():
    return jsonify({"service": "donation-checkout", "ok": True})


@core.get("/__ping")
def ping():
    settings = current_app.config["CHECKOUT_SETTINGS"]
    return jsonify({"ok": True, "dev_mode": settings.dev_mode}), 200
