MIN_RANK = 1
MAX_RANK = 5

# Capacity assigned to mentor rows created before capacity was required.
DEFAULT_MIGRATED_CAPACITY = 5
# Capacity used when a mentor registers without stating one.
DEFAULT_REGISTRATION_CAPACITY = 2
# Directory shows "limited" at or below this many open slots.
LIMITED_SLOTS_THRESHOLD = 2

MIN_PASSWORD_LENGTH = 6
BCRYPT_MAX_BYTES = 72
JWT_ALGORITHM = "HS256"
DEFAULT_JWT_EXPIRE_MINUTES = 60 * 24
DEFAULT_VIEW_CACHE_TTL_SECONDS = 300

# Constants for Redis keys
MENTOR_DIRECTORY_CACHE_KEY = "mentorship:directory"
MENTOR_REQUESTS_CACHE_KEY = "mentorship:requests:{mentor_id}"
MENTEE_PREFERENCES_CACHE_KEY = "mentorship:preferences:{mentee_id}"
# Generation counters; cached views are stored under "<view key>:v<generation>".
DIRECTORY_GENERATION_KEY = "mentorship:generation:directory"
REQUESTS_GENERATION_KEY = "mentorship:generation:requests"
PREFERENCES_GENERATION_KEY = "mentorship:generation:preferences:{mentee_id}"
