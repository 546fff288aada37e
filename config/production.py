import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "bundy"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "bundy_kiosk"),
}

ORG_ID = os.getenv("ORG_ID", "")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

TOGGLE_MAX_ATTEMPTS = int(os.getenv("TOGGLE_MAX_ATTEMPTS", "3"))
TOGGLE_LOCK_TIMEOUT = float(os.getenv("TOGGLE_LOCK_TIMEOUT", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

DEMO_EMPLOYEES = []
