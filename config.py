import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./credit_ledger.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Session tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-only-jwt-secret-change-me-in-env-yaml")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")

    # Credit policy
    INITIAL_CREDIT_CENTS = int(data.get("INITIAL_CREDIT_CENTS", 1000))
    BALANCE_ALERT_THRESHOLDS = data.get("BALANCE_ALERT_THRESHOLDS", [50, 10, 5])  # Percent remaining
    CHECKOUT_ALLOWED_AMOUNTS = data.get("CHECKOUT_ALLOWED_AMOUNTS", [10, 25, 50, 100])  # USD
    PURCHASE_KEYWORDS = data.get("PURCHASE_KEYWORDS", ["purchase", "stripe", "checkout"])

    # Billing ledger read
    LEDGER_HISTORY_LIMIT = int(data.get("LEDGER_HISTORY_LIMIT", 120))
    USAGE_WINDOW_DAYS = int(data.get("USAGE_WINDOW_DAYS", 30))
    AGENT_STATS_LIMIT = int(data.get("AGENT_STATS_LIMIT", 12))

    # Stripe
    STRIPE_SECRET_KEY = data.get("STRIPE_SECRET_KEY", "")
    STRIPE_WEBHOOK_SECRET = data.get("STRIPE_WEBHOOK_SECRET", "")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")

    # Compute resume after purchase (best effort)
    RESUME_ON_PURCHASE = bool(data.get("RESUME_ON_PURCHASE", True))
    RESUME_SERVICE_URL = data.get("RESUME_SERVICE_URL", None)
    RESUME_SERVICE_TOKEN = data.get("RESUME_SERVICE_TOKEN", "")
    RESUME_TIMEOUT_SECONDS = float(data.get("RESUME_TIMEOUT_SECONDS", 5.0))
