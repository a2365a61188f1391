import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

SUPABASE_CONFIG = {
    "url": os.getenv("SUPABASE_URL", ""),
    "api_key": os.getenv("SUPABASE_ANON_KEY", ""),
    "timeout": float(os.getenv("SUPABASE_TIMEOUT", "20")),
}

# Generate with werkzeug.security.generate_password_hash
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
