import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shuvodin.db")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Frontend base URL (CORS + links in exported data)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", FRONTEND_URL).split(",")
    if origin.strip()
]

# Sessions
SESSION_EXPIRATION_DAYS = int(os.getenv("SESSION_EXPIRATION_DAYS", "30"))
# Sensitive settings (disable 2FA, regenerate backup codes) need a session verified this recently
RECENT_VERIFICATION_MINUTES = int(os.getenv("RECENT_VERIFICATION_MINUTES", "120"))

# Two-factor authentication
TOTP_ISSUER = os.getenv("TOTP_ISSUER", "ShuvoDin")
BACKUP_CODE_COUNT = int(os.getenv("BACKUP_CODE_COUNT", "10"))

# Reject passwords that appear in the pwned-passwords corpus
PASSWORD_BREACH_CHECK_ENABLED = os.getenv("PASSWORD_BREACH_CHECK_ENABLED", "true").lower() == "true"
PWNED_PASSWORDS_URL = os.getenv("PWNED_PASSWORDS_URL", "https://api.pwnedpasswords.com/range")
PWNED_PASSWORDS_TIMEOUT = float(os.getenv("PWNED_PASSWORDS_TIMEOUT", "1.0"))

# Rate limiting (login, booking requests)
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

# Security headers middleware
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"
