SECRET_KEY = "test-secret"

SYNC_CONFIG = {
    "script_url": "https://script.example.test/exec",
    "retries": 2,
    "timeout_seconds": 5,
    "user_storage_key": "ksp_user",
    "image_max_dimension": 64,
    "jpeg_quality": 70,
}

SCHOOL_CONFIG = {
    "admin_id_card": "1469900181659",
    "school_lat": 16.4322,
    "school_lng": 103.5061,
    "check_in_radius_m": 200,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
