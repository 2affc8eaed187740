from donation_checkout import create_app
import os

app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", 8888))
    app.run(
        host="127.0.0.1",
        port=port,
        debug=False,
        use_reloader=False,
    )

# Local dev without Stripe credentials:
# CHECKOUT_DEV_MODE=1 python run.py

# Against Stripe test mode:
# STRIPE_SECRET_KEY=sk_test_... DEFAULT_CURRENCY=inr python run.py

# Or with the Flask CLI:
# flask --app donation_checkout:create_app --debug run --port 8888
