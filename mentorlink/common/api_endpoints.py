MY_USER_ENDPOINT = "/users/me"
REGISTER_ENDPOINT = "/auth/register"
LOGIN_ENDPOINT = "/auth/login"

MENTOR_DIRECTORY_ENDPOINT = "/mentors"
MY_PREFERENCES_ENDPOINT = "/mentorship/preferences"
MENTOR_REQUESTS_ENDPOINT = "/mentorship/requests"
MENTOR_REQUEST_DECISION_ENDPOINT = "/mentorship/requests/{selection_id}/decision"
MATCHED_MENTEES_ENDPOINT = "/mentorship/mentees"

HEALTH_ENDPOINT = "/fastapi/health"

API_PREFIX = "/api"

# Paths reachable without a bearer token.
PUBLIC_PATHS = frozenset(
    {
        HEALTH_ENDPOINT,
        "/docs",
        "/redoc",
        "/openapi.json",
        API_PREFIX + MENTOR_DIRECTORY_ENDPOINT,
        API_PREFIX + REGISTER_ENDPOINT,
        API_PREFIX + LOGIN_ENDPOINT,
    }
)
