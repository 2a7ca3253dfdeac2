import json
import os
from pydantic import TypeAdapter
from redis.exceptions import RedisError
from mentorlink.common.constants import (
    DEFAULT_VIEW_CACHE_TTL_SECONDS,
    DIRECTORY_GENERATION_KEY,
    MENTOR_DIRECTORY_CACHE_KEY,
    MENTOR_REQUESTS_CACHE_KEY,
    MENTEE_PREFERENCES_CACHE_KEY,
    PREFERENCES_GENERATION_KEY,
    REQUESTS_GENERATION_KEY,
)
from mentorlink.common.environment_constants import VIEW_CACHE_TTL_SECONDS


class ViewCacheService:
    """
    Redis-backed cache for read views (directory, request queues, dashboards).

    The database stays authoritative. Every view key carries the generation of
    its view family, and a mutation bumps the generations it affects instead of
    deleting keys. A reader resolves its key before querying the database, so a
    list computed before a concurrent write lands under a generation nobody reads
    any more and simply expires. Any Redis failure is logged and treated as a
    cache miss.
    """

    def __init__(self, logger, redis_client, retry_utils):
        """
        Args:
            logger: The logger instance for logging messages.
            redis_client: The Redis client instance.
            retry_utils: A RetryUtils for handling retries on transient errors.
        """
        self.logger = logger
        self.redis_client = redis_client
        self.retry_utils = retry_utils
        self.ttl_seconds = int(
            os.getenv(VIEW_CACHE_TTL_SECONDS, DEFAULT_VIEW_CACHE_TTL_SECONDS)
        )

    def directory_key(self) -> str | None:
        return self._versioned_key(MENTOR_DIRECTORY_CACHE_KEY, DIRECTORY_GENERATION_KEY)

    def mentor_requests_key(self, mentor_id: int) -> str | None:
        return self._versioned_key(
            MENTOR_REQUESTS_CACHE_KEY.format(mentor_id=mentor_id),
            REQUESTS_GENERATION_KEY,
        )

    def mentee_preferences_key(self, mentee_id: int) -> str | None:
        return self._versioned_key(
            MENTEE_PREFERENCES_CACHE_KEY.format(mentee_id=mentee_id),
            PREFERENCES_GENERATION_KEY.format(mentee_id=mentee_id),
        )

    def _versioned_key(self, view_key: str, generation_key: str) -> str | None:
        """
        Build the key of the current generation of a view.

        Returns:
            str | None: e.g. "mentorship:requests:7:v3", or None when the
                generation cannot be read (the view is then not cached).
        """
        try:
            generation = self.retry_utils.get_retry_on_transient(
                self.redis_client.get, generation_key
            )
        except RedisError as e:
            self.logger.warning(
                "[ViewCacheService] generation read failed for %s: %s",
                generation_key,
                e,
            )
            return None

        return f"{view_key}:v{int(generation or 0)}"

    def get_list(self, key: str | None, dto_cls) -> list | None:
        """
        Read a cached list of DTOs.

        Args:
            key (str | None): Versioned Redis key; None disables the lookup.
            dto_cls: The DTO class of the list items.

        Returns:
            list | None: The cached DTOs, or None on a miss or a Redis failure.
        """
        if key is None:
            return None

        try:
            raw = self.retry_utils.get_retry_on_transient(self.redis_client.get, key)
        except RedisError as e:
            self.logger.warning("[ViewCacheService] read failed for %s: %s", key, e)
            return None

        if raw is None:
            return None

        self.logger.debug("[ViewCacheService] cache hit: %s", key)
        return TypeAdapter(list[dto_cls]).validate_python(json.loads(raw))

    def set_list(self, key: str | None, dtos: list) -> None:
        """Store a list of DTOs (serialized by alias) with the configured TTL."""
        if key is None:
            return

        payload = json.dumps(
            [dto.model_dump(mode="json", by_alias=True) for dto in dtos]
        )
        try:
            self.retry_utils.get_retry_on_transient(
                self.redis_client.set, key, payload, ex=self.ttl_seconds
            )
        except RedisError as e:
            self.logger.warning("[ViewCacheService] write failed for %s: %s", key, e)

    def invalidate_after_preference_change(self, mentee_id: int) -> None:
        """
        Retire the views affected by a mentee editing a rank.

        The edited rank can appear in, or disappear from, any mentor's queue,
        so every request queue is retired together with the mentee's dashboard.
        Overwriting an accepted rank also frees a slot in the directory.
        """
        self._bump_generations(
            [
                PREFERENCES_GENERATION_KEY.format(mentee_id=mentee_id),
                REQUESTS_GENERATION_KEY,
                DIRECTORY_GENERATION_KEY,
            ]
        )

    def invalidate_after_decision(self, mentee_id: int) -> None:
        """
        Retire the views affected by a mentor decision.

        A rejection can make the mentee's next rank actionable at another
        mentor, and an acceptance changes the directory's slot counts.
        """
        self._bump_generations(
            [
                PREFERENCES_GENERATION_KEY.format(mentee_id=mentee_id),
                REQUESTS_GENERATION_KEY,
                DIRECTORY_GENERATION_KEY,
            ]
        )

    def _bump_generations(self, generation_keys: list[str]) -> None:
        try:
            pipeline = self.redis_client.pipeline()
            for generation_key in generation_keys:
                pipeline.incr(generation_key)
            self.retry_utils.get_retry_on_transient(pipeline.execute)
        except RedisError as e:
            self.logger.error(
                "[ViewCacheService] invalidation failed for %s: %s",
                generation_keys,
                e,
            )
