"""Data Access Object (DAO) implementation for managing links in Redis

This module provides a Redis-based implementation of LinkBaseDAO. Each link is
stored as a single Redis hash:

    <prefix>:links:<linkid> -> {url, baseUrl, accessed, createdAt, token}

Responsibilities:
    - Check identifier existence for the allocator;
    - Insert link records, together with their optional TTL, atomically;
    - Count accesses and read the target URL in a single round trip;
    - Update target URLs (optionally with a new TTL), set TTLs and delete links;
    - Translate Redis failures into DAO exceptions.

Classes:
    LinkRedisDAO:
        DAO for storing and retrieving LinkModel records in a Redis datastore.

Example:
    >>> from shortlinks.models import LinkModel
    >>> from shortlinks.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(redis_url='redis://localhost:6379/0', prefix='shortlinks:dev')
    >>> dao.insert(LinkModel(linkid='Gh71TCN', url='https://example.com', base_url='https://sho.rt', token='...'))
    <LinkRedisDAO>
    >>> dao.resolve('Gh71TCN')
    (1, 'https://example.com')
    >>> dao.expire('Gh71TCN', 60)
    <LinkRedisDAO>
"""

import redis
from beartype import beartype

from shortlinks.models import LinkModel
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error
from shortlinks.dao.exceptions import LinkNotFoundError, DataStoreWriteError


# Both scripts act only on existing keys: HINCRBY/HSET would otherwise
# re-create a link that was never created or has just expired.
RESOLVE_LUA = r"""
if redis.call("EXISTS", KEYS[1]) == 0 then
  return false
end
local accessed = redis.call("HINCRBY", KEYS[1], "accessed", 1)
local url = redis.call("HGET", KEYS[1], "url")
return {accessed, url}
"""

UPDATE_URL_LUA = r"""
if redis.call("EXISTS", KEYS[1]) == 0 then
  return 0
end
redis.call("HSET", KEYS[1], "url", ARGV[1])
if ARGV[2] then
  redis.call("EXPIRE", KEYS[1], tonumber(ARGV[2]))
end
return 1
"""


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing link records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        exists(linkid: str) -> bool
        insert(link: LinkModel, expire: int | None = None) -> LinkRedisDAO
        expire(linkid: str, seconds: int) -> LinkRedisDAO
        resolve(linkid: str) -> tuple[int, str]
        owner_token(linkid: str) -> str
        update_url(linkid: str, url: str, expire: int | None = None) -> LinkRedisDAO
        delete(linkid: str) -> int

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def exists(self, linkid: str, **kwargs) -> bool:
        return bool(self.redis.hexists(self.keys.link_key(linkid), 'url'))

    @handle_redis_connection_error
    @beartype
    def insert(self, link: LinkModel, expire: int | None = None, **kwargs) -> 'LinkRedisDAO':
        """Insert a link record into Redis

        All fields are written with a single HSET inside a MULTI/EXEC transaction,
        so readers never observe a partially written record. The TTL, if any, is
        queued right after the HSET in the same transaction: a link is never
        stored without the expiry it was created with.

        Args:
            link (LinkModel):
                LinkModel instance to store.
            expire (int | None):
                Seconds until Redis drops the link. None keeps it forever.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            LinkRedisDAO: self (for method chaining)

        Raises:
            DataStoreWriteError:
                If Redis rejects the write.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        fields = {
            'url': link.url,
            'baseUrl': link.base_url,
            'accessed': link.accessed,
            'createdAt': link.created_at.isoformat(),
            'token': link.token,
        }

        key = self.keys.link_key(link.linkid)
        try:
            with self.redis.pipeline(transaction=True) as pipe:
                pipe.hset(key, mapping=fields)
                if expire is not None:
                    pipe.expire(key, expire)
                written, *expired = pipe.execute()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError):
            raise
        except redis.exceptions.RedisError as e:
            raise DataStoreWriteError(f"Failed to write link '{link.linkid}' to Redis.") from e

        if not isinstance(written, int) or not all(expired):
            raise DataStoreWriteError(f"Failed to write link '{link.linkid}' to Redis (reply: {[written, *expired]!r}).")
        return self

    @handle_redis_connection_error
    @beartype
    def expire(self, linkid: str, seconds: int, **kwargs) -> 'LinkRedisDAO':
        if not self.redis.expire(self.keys.link_key(linkid), seconds):
            raise LinkNotFoundError(f"Link with id '{linkid}' not found.")
        return self

    @handle_redis_connection_error
    @beartype
    def resolve(self, linkid: str, **kwargs) -> tuple[int, str]:
        """Increment the access counter of a link and return it with the target URL

        Runs as one Lua script, so the returned count and URL belong to the
        same logical update and concurrent resolves never share a count.

        Args:
            linkid (str):
                Identifier of the link.

        Returns:
            tuple[int, str]:
                (new access count, target URL)

        Raises:
            LinkNotFoundError:
                If the link doesn't exist. Nothing is incremented in that case.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.resolve('Gh71TCN')
            (3, 'https://example.com')
        """
        result = self.redis.eval(RESOLVE_LUA, 1, self.keys.link_key(linkid))
        if result is None:
            raise LinkNotFoundError(f"Link with id '{linkid}' not found.")

        accessed, url = result
        return int(accessed), url

    @handle_redis_connection_error
    @beartype
    def owner_token(self, linkid: str, **kwargs) -> str:
        token = self.redis.hget(self.keys.link_key(linkid), 'token')
        if token is None:
            raise LinkNotFoundError(f"Link with id '{linkid}' not found.")
        return token

    @handle_redis_connection_error
    @beartype
    def update_url(self, linkid: str, url: str, expire: int | None = None, **kwargs) -> 'LinkRedisDAO':
        """Replace the target URL of a link and, if given, its TTL in one script call

        Raises:
            LinkNotFoundError:
                If the link doesn't exist. Neither change is applied in that case.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        args = [url] if expire is None else [url, expire]
        if not self.redis.eval(UPDATE_URL_LUA, 1, self.keys.link_key(linkid), *args):
            raise LinkNotFoundError(f"Link with id '{linkid}' not found.")
        return self

    @handle_redis_connection_error
    @beartype
    def delete(self, linkid: str, **kwargs) -> int:
        # UNLINK reclaims memory in the background
        return int(self.redis.unlink(self.keys.link_key(linkid)))
