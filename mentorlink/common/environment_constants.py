# Names of the environment variables read by the service.
DATABASE_URL = "DATABASE_URL"
LOG_LEVEL = "LOG_LEVEL"

JWT_SECRET = "JWT_SECRET"
JWT_EXPIRE_MINUTES = "JWT_EXPIRE_MINUTES"

REDIS_HOST = "REDIS_HOST"
REDIS_PORT = "REDIS_PORT"
REDIS_PASSWORD = "REDIS_PASSWORD"
REDIS_SSL = "REDIS_SSL"
VIEW_CACHE_TTL_SECONDS = "VIEW_CACHE_TTL_SECONDS"
