import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_admin_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE = "memory"
SEED_EMPLOYEE_IDS = [1, 2, 3]

NORMAL_HOURS_PER_DAY = "8"
ANNUAL_LEAVE_ENTITLEMENT = 25
ENFORCE_LEAVE_STATUS_TRANSITIONS = False

AUTO_INIT_DB = False
