from .core_routes import core
from .checkout_routes import checkout_bp
from .admin_routes import admin_bp

__all__ = ["core", "checkout_bp", "admin_bp"]
