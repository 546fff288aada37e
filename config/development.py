import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "bundy_kiosk"),
}

# Organization shown on this kiosk when requests do not name one
ORG_ID = os.getenv("ORG_ID", "demo-org")

# 'mysql' or 'memory' (memory keeps the ledger in-process and serves DEMO_EMPLOYEES)
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

TOGGLE_MAX_ATTEMPTS = int(os.getenv("TOGGLE_MAX_ATTEMPTS", "3"))
TOGGLE_LOCK_TIMEOUT = float(os.getenv("TOGGLE_LOCK_TIMEOUT", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

DEMO_EMPLOYEES = [
    {"employee_id": "e-001", "name": "Alex Nguyen"},
    {"employee_id": "e-002", "name": "Sam Taylor"},
    {"employee_id": "e-003", "name": "Jordan Lee"},
]
