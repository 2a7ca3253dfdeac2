import os
from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError, TimeoutError
from mentorlink.common.environment_constants import (
    REDIS_HOST,
    REDIS_PASSWORD,
    REDIS_PORT,
    REDIS_SSL,
)


class RedisClientError(Exception):
    """Exception raised when creating the Redis client fails."""


class RedisClient:
    """
    A Redis client factory that creates and caches a Redis client.

    Connection parameters come from the environment; transient connection
    failures are retried through the injected RetryUtils instance.

    Attributes:
        _redis_client (Redis | None): Cached Redis client instance.
    """

    def __init__(
        self,
        logger,
        retry_utils,
    ):
        """
        Initialize the Redis client factory.

        Args:
            logger: Logger instance for logging.
            retry_utils: RetryUtils instance providing retry logic.

        Raises:
            ValueError: If the Redis host is not configured.
        """
        self.logger = logger
        self.retry_utils = retry_utils
        self._redis_host = os.environ.get(REDIS_HOST)
        self._redis_port = int(os.environ.get(REDIS_PORT, "6379"))
        if not self._redis_host:
            raise ValueError(f"Please set environment variable: {REDIS_HOST}.")
        self._redis_client = self.create_redis_client()

    def _connect_to_redis(self) -> Redis:
        """
        Attempt to create a Redis client and verify connectivity.

        Returns:
            Redis: Connected Redis client.

        Raises:
            RedisConnectionError: If a connection-related error occurs.
            TimeoutError: If a timeout occurs during connection.
        """
        client = Redis(
            host=self._redis_host,
            port=self._redis_port,
            password=os.environ.get(REDIS_PASSWORD),
            ssl=os.environ.get(REDIS_SSL, "false").lower() == "true",
            decode_responses=True,
        )
        client.ping()
        return client

    def create_redis_client(self) -> Redis:
        """
        Create and return the Redis client instance.

        Retries transient connection errors using the injected RetryUtils instance.

        Returns:
            Redis: Connected Redis client.

        Raises:
            RedisClientError: If connection fails after retries.
            Exception: For any unexpected errors during client creation.
        """
        try:
            redis_client = self.retry_utils.get_retry_on_transient(
                self._connect_to_redis
            )
            self.logger.info("Created Redis client successfully.")
        except (RedisConnectionError, TimeoutError) as e:
            self.logger.error(
                "Failed to connect to Redis server %s:%s after retries: %s",
                self._redis_host,
                self._redis_port,
                e,
            )
            raise RedisClientError("Failed to create Redis client.")
        except Exception as e:
            self.logger.error("Unexpected error during Redis client creation: %s", e)
            raise

        return redis_client

    def get_redis_client(self) -> Redis:
        """
        Return the cached Redis client instance.

        Returns:
            Redis: Connected Redis client.
        """
        return self._redis_client
