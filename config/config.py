# config/config.py
import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()


def _flag(value, default=False):
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes")


class Config:
    # --- App settings ---
    NODE_ENV = os.getenv("NODE_ENV", "development")
    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("PORT", 5000))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- CORS Settings ---
    # Accept comma-separated values: e.g., "https://example.com,https://www.example.com"
    ALLOWED_ORIGINS = [
        o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()
    ]

    # --- Notification ---
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
    NOTIFY_TIMEZONE = os.getenv("NOTIFY_TIMEZONE", "Asia/Kolkata")

    # --- SMTP ---
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", 587))
    SMTP_USER = os.getenv("SMTP_USER")
    SMTP_PASS = os.getenv("SMTP_PASS")

    # Port 465 means implicit TLS, anything else upgrades with STARTTLS
    SMTP_SECURE = _flag(os.getenv("SMTP_SECURE"), default=SMTP_PORT == 465)

    FROM_EMAIL = os.getenv("FROM_EMAIL") or SMTP_USER

    # --- Database ---
    # No default: the service refuses to start without storage
    DATABASE_URL = os.getenv("DATABASE_URL")
