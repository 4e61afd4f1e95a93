# storefront/services/rate_limiter.py
import redis
from redis.exceptions import RedisError

from storefront.domain.errors import RateLimited
from storefront.utils.logging import get_logger
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW_SECONDS

logger = get_logger(__name__)


class RateLimiter:
    """
    Fixed window per klucz (IP klienta).
    INCR + EXPIRE NX w jednej transakcji (MULTI/EXEC): okno startuje przy pierwszym trafieniu.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        limit: int | None = None,
        window: int | None = None,
    ):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.limit = limit or RATE_LIMIT_REQUESTS
        self.window = window or RATE_LIMIT_WINDOW_SECONDS

    @redis_retry()
    def hit(self, key: str) -> int:
        name = f"ratelimit:{key}"
        pipe = self.redis.pipeline(transaction=True)
        pipe.incr(name)
        pipe.expire(name, self.window, nx=True)
        count, _ = pipe.execute()
        return count

    def check(self, key: str):
        """RateLimited gdy limit przekroczony. Redis niedostepny -> przepuszczamy (warning)."""
        try:
            count = self.hit(key)
        except RedisError as e:
            logger.warning(f"Rate limiter unavailable, allowing request from {key}: {e}")
            return
        if count > self.limit:
            logger.warning(f"Rate limit exceeded for {key}: {count}/{self.limit} in {self.window}s")
            raise RateLimited()
