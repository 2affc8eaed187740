"""
Error taxonomy for the checkout handler.

Every CheckoutError carries the HTTP status and the plain-text message that is
safe to show the caller. Anything else raised while talking to the payment
provider is wrapped in ProviderError so internal detail stays server-side.
"""

GENERIC_PROVIDER_MESSAGE = "Internal Server Error: could not create checkout session"


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing."""


class CheckoutError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MethodNotAllowed(CheckoutError):
    status_code = 405
    message = "Method Not Allowed"


class BadRequest(CheckoutError):
    status_code = 400
    message = "Bad Request"


class ProviderError(CheckoutError):
    status_code = 500
    message = GENERIC_PROVIDER_MESSAGE

    def __init__(self, detail: str | None = None):
        # detail is for logs only; the public message never changes
        self.detail = detail
        super().__init__()

    def __str__(self) -> str:
        return self.detail or self.message
