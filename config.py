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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoices.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Outbound invoice notifications
    NOTIFICATION_WEBHOOK_URL = data.get("NOTIFICATION_WEBHOOK_URL", None)  # None = log only
    NOTIFICATION_TIMEOUT_SECONDS = float(data.get("NOTIFICATION_TIMEOUT_SECONDS", 10.0))
    INVOICE_EMAIL_SUBJECT = data.get("INVOICE_EMAIL_SUBJECT", "New invoice is now available")
    COMPANY_NAME = data.get("COMPANY_NAME", "Company Name")
    # Without a webhook, confirm delivery right after logging (development)
    SIMULATE_DELIVERY_CONFIRMATION = bool(data.get("SIMULATE_DELIVERY_CONFIRMATION", True))

    # Create tables on startup (development; use migrations in production)
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
