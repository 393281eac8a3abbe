"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkNotFoundError:
        Raised when a link is absent from the data store (never created or expired).

    DataStoreError:
        Raised when the data store can't be reached (e.g., connection issues, timeouts).

    DataStoreWriteError:
        Raised when the data store doesn't acknowledge a write.

Example:
    >>> from shortlinks.dao.exceptions import LinkNotFoundError
    >>> raise LinkNotFoundError("Link with id 'abc1234' not found.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.LinkNotFoundError: Link with id 'abc1234' not found.
"""

from shortlinks.exceptions import ShortLinksError


class DAOError(ShortLinksError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class LinkNotFoundError(DAOError):
    """Raised when a link is not found in the data store."""

    error_code = 'dao:link_not_found_error'


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, and out-of-memory failures.
    """

    error_code = 'dao:data_store_error'


class DataStoreWriteError(DataStoreError):
    """Raised when the data store does not acknowledge a write."""

    error_code = 'dao:data_store_write_error'
