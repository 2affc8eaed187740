from prometheus_client import Counter, Histogram

CHECKOUT_REQUESTS = Counter(
    "donation_checkout_requests_total",
    "Checkout requests by outcome",
    ["outcome"],
)

CHECKOUT_AMOUNT = Histogram(
    "donation_checkout_amount_minor_units",
    "Amount of created checkout sessions, in minor currency units",
    ["currency"],
    buckets=(1_000, 10_000, 50_000, 100_000, 500_000, 1_000_000, 10_000_000),
)

OUTCOME_BY_STATUS = {
    400: "bad_request",
    405: "method_not_allowed",
    500: "provider_error",
}


def record_outcome(status_code: int) -> None:
    if status_code == 200:
        outcome = "created"
    else:
        outcome = OUTCOME_BY_STATUS.get(status_code, "error")
    CHECKOUT_REQUESTS.labels(outcome=outcome).inc()


def record_amount(currency: str, unit_amount: int) -> None:
    CHECKOUT_AMOUNT.labels(currency=currency).observe(unit_amount)
