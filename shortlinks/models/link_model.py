from dataclasses import dataclass, field
from datetime import datetime, UTC


@dataclass(frozen=True)
class LinkModel:
    """Represent a shortened link record.

    Attributes:
        linkid (str):
            Short public identifier naming the link (primary key).
        url (str):
            Absolute URL the link redirects to.
        base_url (str):
            Origin used to build the shareable short link.
        token (str):
            Owner token; whoever presents it may update or delete the link.
        accessed (int):
            Number of times the link was resolved.
        created_at (datetime):
            Moment the link was created (UTC).

    Example:
        >>> link = LinkModel(
        ...     linkid='Gh71TCN',
        ...     url='https://example.com/article/123',
        ...     base_url='https://sho.rt',
        ...     token='V1StGXR8_Z5jdHi6B-myTV1StGXR8_',
        ... )
        >>> link.short_link
        'https://sho.rt/Gh71TCN'
        >>> link.accessed
        0
    """

    linkid: str
    url: str
    base_url: str
    token: str
    accessed: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def short_link(self) -> str:
        return f'{self.base_url.rstrip("/")}/{self.linkid}'
