"""Abstract base class for link data access objects (DAOs).

This class establishes a consistent contract for all link DAO implementations,
regardless of the underlying storage mechanism.

Responsibilities:
    - Provide one operation per store capability used by the Lambda handlers.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.models import LinkModel
        >>> from shortlinks.dao.redis import LinkRedisDAO

        >>> dao = LinkRedisDAO(...)
        >>> dao.insert(LinkModel(linkid='a1b2c3d', url='https://example.com', base_url='https://sho.rt', token='...'))
        >>> dao.resolve('a1b2c3d')
        (1, 'https://example.com')
        >>> dao.resolve('a1b2c3d')
        (2, 'https://example.com')
        >>> dao.delete('a1b2c3d')
        1

NOTE:
    Every operation may raise DataStoreError when the data store is unavailable.
    Implementations must not retry; the error propagates to the caller.
"""

from abc import ABC, abstractmethod

from shortlinks.models import LinkModel


class LinkBaseDAO(ABC):
    """Interface for link data access objects (DAOs)."""

    @abstractmethod
    def exists(self, linkid: str, **kwargs) -> bool:
        """Check whether a link with the given identifier is stored.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, link: LinkModel, expire: int | None = None, **kwargs) -> 'LinkBaseDAO':
        """Write all fields of a new link as a single atomic record.

        When `expire` is given, the TTL is applied in the same atomic step:
        either the link is stored with its expiry or nothing is stored.

        The DAO does not check for an existing record; avoiding identifier
        collisions is the allocator's job.

        Returns:
            LinkBaseDAO: self (for method chaining)

        Raises:
            DataStoreWriteError:
                If the data store does not acknowledge the write.
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def expire(self, linkid: str, seconds: int, **kwargs) -> 'LinkBaseDAO':
        """Let the data store drop the link after `seconds`.

        Raises:
            LinkNotFoundError:
                If the link doesn't exist.
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def resolve(self, linkid: str, **kwargs) -> tuple[int, str]:
        """Atomically increment the access counter and read the target URL.

        Both values reflect the same update. An absent link is never counted.

        Returns:
            tuple[int, str]: (new access count, target URL)

        Raises:
            LinkNotFoundError:
                If the link doesn't exist (never created or expired).
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def owner_token(self, linkid: str, **kwargs) -> str:
        """Return the owner token of a link.

        Raises:
            LinkNotFoundError:
                If the link doesn't exist.
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update_url(self, linkid: str, url: str, expire: int | None = None, **kwargs) -> 'LinkBaseDAO':
        """Replace the target URL of an existing link.

        When `expire` is given, the new TTL is applied in the same atomic
        step: either both changes are applied or neither is.

        Raises:
            LinkNotFoundError:
                If the link doesn't exist (e.g. it expired in the meantime).
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, linkid: str, **kwargs) -> int:
        """Remove a link.

        Returns:
            int: number of removed records (0 or 1)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
