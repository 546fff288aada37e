import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "bundy_kiosk_test"),
}

ORG_ID = "test-org"

STORE_BACKEND = "memory"

TOGGLE_MAX_ATTEMPTS = 3
TOGGLE_LOCK_TIMEOUT = 5.0

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

DEMO_EMPLOYEES = [
    {"employee_id": "e-100", "name": "Casey Brown"},
    {"employee_id": "e-101", "name": "avery Smith"},
    {"employee_id": "e-102", "name": "Blake Jones", "active": False},
]
