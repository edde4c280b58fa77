import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "wellness_test"),
}

DEBUG = False
TESTING = True

DEFAULT_TIMEZONE = "Asia/Manila"
MAX_REPORT_DAYS = 1830

LOG_LEVEL = "WARNING"
LOG_JSON = False

CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"
CELERY_ALWAYS_EAGER = True

AUTO_INIT_DB = False
