"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BUDDHIST_ERA_OFFSET = 543
# Display years at or below this are treated as already Gregorian.
BUDDHIST_YEAR_THRESHOLD = 2400

# Safety valve against values that were JSON-encoded more than once upstream.
MAX_UNWRAP_ATTEMPTS = 5

DRIVE_THUMBNAIL_URL = "https://drive.google.com/thumbnail?id={file_id}&sz=w1000"

DEFAULT_SYNC_RETRIES = 3
DEFAULT_SYNC_TIMEOUT_SECONDS = 180
BACKOFF_BASE_SECONDS = 2.0
ERROR_BODY_PREVIEW_CHARS = 100

DEFAULT_IMAGE_MAX_DIMENSION = 1024
DEFAULT_JPEG_QUALITY = 70

DEFAULT_USER_STORAGE_KEY = "ksp_user"
DEFAULT_CHECK_IN_RADIUS_M = 200
EARTH_RADIUS_M = 6371e3

# Daily targets per group: kcal, protein (g), fat (g), carbs (g).
NUTRITION_STANDARDS = {
    "kindergarten": {"calories": 1200, "protein": 35, "fat": 40, "carbs": 175},
    "primary": {"calories": 1600, "protein": 45, "fat": 53, "carbs": 230},
    "secondary": {"calories": 2100, "protein": 60, "fat": 70, "carbs": 300},
}

# Harris-Benedict TDEE multipliers.
ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
}
MALE_TITLES = ("เด็กชาย", "นาย")

UNSPECIFIED = "ไม่ระบุ"
TOP_LOCATIONS = 5

# Procurement types grouped the way the finance office reports them.
BUYING_TYPES = ("วัสดุ", "วัตถุ", "ครุภัณฑ์", "ที่ดิน", "อื่นๆ")
HIRING_TYPES = ("ก่อสร้าง", "จ้างเหมาบริการ", "เช่า")

# Sick students staying in the infirmary are counted as sick only.
INFIRMARY_DORMITORY = "เรือนพยาบาล"

LEAVE_TYPES = (
    "ลาป่วย",
    "ลากิจส่วนตัว",
    "ลาพักผ่อน",
    "ลาคลอดบุตร",
    "ลาไปช่วยเหลือภริยาที่คลอดบุตร",
    "ลาอุปสมบทหรือไปประกอบพิธีฮัจญ์",
    "ลาเข้ารับการตรวจเลือกหรือเข้ารับการเตรียมพล",
    "ลาไปศึกษา ฝึกอบรม ดูงาน หรือปฏิบัติการวิจัย",
)
# Personnel special ranks allowed to approve leave besides admins.
LEAVE_APPROVER_RANKS = ("director", "deputy")

DEFAULT_SCHOOL_LAT = 16.4322
DEFAULT_SCHOOL_LNG = 103.5061

DEFAULT_SETTINGS = {
    "schoolName": "โรงเรียนกาฬสินธุ์ปัญญานุกูล",
    "schoolLogo": "",
    "dormitories": [],
    "positions": [],
    "academicYears": [],
    "studentClasses": [],
    "studentClassrooms": [],
    "serviceLocations": [],
    "schoolLat": DEFAULT_SCHOOL_LAT,
    "schoolLng": DEFAULT_SCHOOL_LNG,
    "checkInRadius": DEFAULT_CHECK_IN_RADIUS_M,
    "leaveTypes": list(LEAVE_TYPES),
    "leaveApproverIds": [],
}
