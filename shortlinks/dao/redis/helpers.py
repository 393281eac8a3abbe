import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shortlinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def describe_connection(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' for the client's connection pool."""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle Redis failures

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            any redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis
            and on commands Redis refuses to run (READONLY replica, OOM, NOSCRIPT, ...).

    Example:
        >>> @handle_redis_connection_error
        ... def delete(self, linkid):
        ...     return self.redis.unlink(linkid)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {describe_connection(self.redis)} failed to run {method.__name__}(): {e}') from e

    return wrapper
