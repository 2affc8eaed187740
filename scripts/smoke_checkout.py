#!/usr/bin/env python3
"""
Manual smoke test for a running checkout server.

Usage:
  python scripts/smoke_checkout.py [--base URL]

  Start the server first (dev mode avoids real Stripe sessions):
    CHECKOUT_DEV_MODE=1 python run.py
"""
import argparse
import json
import sys
from urllib.request import Request, urlopen
from urllib.error import HTTPError, URLError

BASE = "http://127.0.0.1:8888"
CHECKOUT = "/api/create-checkout-session"


def req(method: str, path: str, data=None, raw: bytes | None = None) -> tuple[object, int]:
    url = f"{BASE.rstrip('/')}{path}"
    headers = {"Content-Type": "application/json"}
    body = raw if raw is not None else (json.dumps(data).encode() if data is not None else None)
    try:
        r = urlopen(Request(url, data=body, headers=headers, method=method), timeout=10)
        text = r.read().decode()
        return _maybe_json(text), r.status
    except HTTPError as e:
        text = e.read().decode() if e.fp else ""
        return _maybe_json(text), e.code
    except URLError as e:
        print(f"Connection error: {e}")
        return None, 0


def _maybe_json(text: str):
    try:
        return json.loads(text) if text else {}
    except json.JSONDecodeError:
        return text


def main():
    global BASE
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--base", default=BASE, help="Base URL (default: http://127.0.0.1:8888)"
    )
    args = ap.parse_args()
    BASE = args.base.rstrip("/")

    checks = [
        (
            "1. Valid donation returns a checkout url",
            ("POST", CHECKOUT, {"name": "Smoke", "email": "smoke@example.com", "amount": 500}, None),
            lambda resp, code: code == 200 and isinstance(resp, dict) and resp.get("url"),
        ),
        (
            "2. GET is rejected",
            ("GET", CHECKOUT, None, None),
            lambda resp, code: code == 405,
        ),
        (
            "3. Malformed JSON is rejected",
            ("POST", CHECKOUT, None, b"{not json"),
            lambda resp, code: code == 400 and resp == "Invalid JSON body",
        ),
        (
            "4. Missing email is rejected",
            ("POST", CHECKOUT, {"amount": 10}, None),
            lambda resp, code: code == 400 and resp == "Email is required",
        ),
        (
            "5. Zero amount is rejected",
            ("POST", CHECKOUT, {"email": "smoke@example.com", "amount": 0}, None),
            lambda resp, code: code == 400 and resp == "Invalid amount",
        ),
    ]

    ok = 0
    fail = 0
    for title, (method, path, data, raw), check in checks:
        print(f"{title} ...")
        resp, code = req(method, path, data, raw)
        if code == 0:
            sys.exit(1)
        if check(resp, code):
            print(f"   OK {code} {resp}")
            ok += 1
        else:
            print(f"   FAIL {code} {resp}")
            fail += 1

    print(f"\n--- {ok} passed, {fail} failed ---")
    sys.exit(1 if fail else 0)


if __name__ == "__main__":
    main()
