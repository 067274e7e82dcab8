import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_admin"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE = "mysql"

NORMAL_HOURS_PER_DAY = os.getenv("NORMAL_HOURS_PER_DAY", "8")
ANNUAL_LEAVE_ENTITLEMENT = int(os.getenv("ANNUAL_LEAVE_ENTITLEMENT", "25"))
ENFORCE_LEAVE_STATUS_TRANSITIONS = bool(int(os.getenv("ENFORCE_LEAVE_STATUS_TRANSITIONS", "0")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
