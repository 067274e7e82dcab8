import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_admin"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "mysql" or "memory" (no database, employees seeded from SEED_EMPLOYEE_IDS)
STORAGE = os.getenv("STORAGE", "mysql")
SEED_EMPLOYEE_IDS = [int(v) for v in os.getenv("SEED_EMPLOYEE_IDS", "").split(",") if v.strip()]

# Business rules, resolved once at startup
NORMAL_HOURS_PER_DAY = os.getenv("NORMAL_HOURS_PER_DAY", "8")
ANNUAL_LEAVE_ENTITLEMENT = int(os.getenv("ANNUAL_LEAVE_ENTITLEMENT", "25"))
ENFORCE_LEAVE_STATUS_TRANSITIONS = bool(int(os.getenv("ENFORCE_LEAVE_STATUS_TRANSITIONS", "0")))

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
