"""
Locust load tests for the checkout API.

Install: pip install -e ".[load]"
Run the server with the fake provider so no Stripe sessions are created:
    CHECKOUT_DEV_MODE=1 python run.py
Then: locust -f locustfile.py --host=http://127.0.0.1:8888

For headless: locust -f locustfile.py --host=http://127.0.0.1:8888 \
    --users 10 --spawn-rate 2 --run-time 1m --headless
"""

import os
import random
from locust import HttpUser, task, between


class CheckoutAPIUser(HttpUser):
    wait_time = between(1, 3)

    def _headers(self):
        return {"Content-Type": "application/json"}

    @task(10)
    def create_checkout_session(self):
        payload = {
            "name": "Load Test",
            "email": os.getenv("LOCUST_DONOR_EMAIL", "load-test@example.com"),
            "amount": random.choice([100, 250, 500, 1000, 12.5]),
        }
        with self.client.post(
            "/api/create-checkout-session",
            json=payload,
            headers=self._headers(),
            catch_response=True,
        ) as r:
            if r.status_code != 200 or "url" not in (r.json() or {}):
                r.failure(f"unexpected response {r.status_code}")

    @task(3)
    def invalid_amount(self):
        with self.client.post(
            "/api/create-checkout-session",
            json={"email": "load-test@example.com", "amount": -1},
            headers=self._headers(),
            catch_response=True,
        ) as r:
            if r.status_code == 400:
                r.success()
            else:
                r.failure(f"expected 400, got {r.status_code}")

    @task(2)
    def ping(self):
        self.client.get("/__ping")

    @task(1)
    def metrics(self):
        token = os.getenv("METRICS_TOKEN")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.client.get("/admin/metrics", headers=headers)
