import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrm_db"),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

DEFAULT_PAYROLL_SETTINGS = {
    "hourly_rate": float(os.getenv("PAYROLL_HOURLY_RATE", "25")),
    "overtime_multiplier": float(os.getenv("PAYROLL_OVERTIME_MULTIPLIER", "1.5")),
    "standard_working_days_per_month": int(os.getenv("PAYROLL_WORKING_DAYS", "22")),
    "deduction_type": os.getenv("PAYROLL_DEDUCTION_TYPE", "hourly"),
    "daily_deduction_rate": float(os.getenv("PAYROLL_DAILY_DEDUCTION_RATE", "0")),
    "currency": os.getenv("PAYROLL_CURRENCY", "USD"),
}
