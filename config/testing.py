import os

SECRET_KEY = "test-secret"

SUPABASE_CONFIG = {
    "url": os.getenv("SUPABASE_URL", "http://supabase.test"),
    "api_key": os.getenv("SUPABASE_ANON_KEY", "test-key"),
    "timeout": 5,
}

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD_HASH = ""

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
