"""Link identifier and token generation

Identifiers are random strings over a URL-safe alphabet. The identifier space
(64^7) is large relative to expected load, so collisions are rare and a small,
bounded number of attempts suffices without a central counter.

Functions:
    generate_linkid(length=7) -> str:
        Random identifier for a new link.
    generate_token(length=30) -> str:
        Random session/owner token.
    allocate_linkid(dao, max_attempts=10) -> str:
        Generate identifiers until one is not taken in the data store.

Example:
    >>> from shortlinks.utils import allocate_linkid
    >>> allocate_linkid(dao)
    'q7_Zb3K'
"""

import logging
import secrets
from collections.abc import Callable

from shortlinks.constants import Link
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.exceptions import AllocationExhaustedError


logger = logging.getLogger(__name__)


def _random_string(length: int) -> str:
    if not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    return ''.join(secrets.choice(Link.ALPHABET) for _ in range(length))


def generate_linkid(length: int = Link.ID_LENGTH) -> str:
    return _random_string(length)


def generate_token(length: int = Link.TOKEN_LENGTH) -> str:
    return _random_string(length)


def allocate_linkid(
    dao: LinkBaseDAO,
    max_attempts: int = Link.MAX_ALLOCATION_ATTEMPTS,
    generate: Callable[[], str] = generate_linkid,
) -> str:
    """Allocate a link identifier which is not yet used in the data store.

    Args:
        dao (LinkBaseDAO):
            Data store used for the existence check.
        max_attempts (int):
            Number of identifiers tried before giving up. Defaults to 10.
        generate (Callable[[], str]):
            Identifier generator. Defaults to generate_linkid().

    Returns:
        str: a free link identifier

    Raises:
        AllocationExhaustedError:
            If every attempt collided with an existing link.
        DataStoreError:
            If the data store can't be reached.

    NOTE:
        The existence check and the later insert are separate round trips, so
        two concurrent requests may still pick the same identifier. The
        probability is negligible for a 7-character random identifier and no
        lock is taken.
    """
    for attempt in range(1, max_attempts + 1):
        linkid = generate()
        if not dao.exists(linkid):
            return linkid
        logger.debug('Link id collision, retrying.', extra={'linkid': linkid, 'attempt': attempt})

    raise AllocationExhaustedError(f'No free link id found after {max_attempts} attempts.')
