import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Apps Script web app that fronts the school spreadsheet
SYNC_CONFIG = {
    "script_url": os.getenv("SCRIPT_URL", ""),
    "retries": int(os.getenv("SYNC_RETRIES", "3")),
    "timeout_seconds": float(os.getenv("SYNC_TIMEOUT_SECONDS", "180")),
    "user_storage_key": os.getenv("USER_STORAGE_KEY", "ksp_user"),
    "image_max_dimension": int(os.getenv("IMAGE_MAX_DIMENSION", "1024")),
    "jpeg_quality": int(os.getenv("JPEG_QUALITY", "70")),
}

SCHOOL_CONFIG = {
    "admin_id_card": os.getenv("ADMIN_ID_CARD", "1469900181659"),
    "school_lat": float(os.getenv("SCHOOL_LAT", "16.4322")),
    "school_lng": float(os.getenv("SCHOOL_LNG", "103.5061")),
    "check_in_radius_m": int(os.getenv("CHECK_IN_RADIUS_M", "200")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
