from typing import Callable, Optional

HeaderGetter = Callable[[str], Optional[str]]


def _first(value: str | None) -> str | None:
    # proxies may append: "https, http"
    if not value:
        return None
    head = value.split(",")[0].strip()
    return head or None


def request_origin(get_header: HeaderGetter, fallback_host: str) -> str:
    """
    Build scheme://host for redirect URLs. Prefers the X-Forwarded-* headers
    set by Netlify and similar proxies, then Host, then fallback_host.
    """
    proto = _first(get_header("x-forwarded-proto")) or "https"
    host = (
        _first(get_header("x-forwarded-host"))
        or _first(get_header("host"))
        or fallback_host
    )
    return f"{proto}://{host}"
