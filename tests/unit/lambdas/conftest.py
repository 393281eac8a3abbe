"""Shared fixtures for Lambda handler tests.

Handlers run against InMemoryLinkDAO, a dict-backed LinkBaseDAO whose
expiry follows the (freezable) wall clock.
"""

import json
import datetime
from typing import cast

import pytest

from shortlinks.types import LambdaEvent
from shortlinks.models import LinkModel
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.exceptions import LinkNotFoundError
from shortlinks.context import AppContext
from shortlinks.utils import Session


TOKEN = 'V1StGXR8_Z5jdHi6B-myTV1StGXR8_'
OTHER_TOKEN = 'ZZZZZZZZZZZZZZZZZZZZZZZZZZZZZZ'


class InMemoryLinkDAO(LinkBaseDAO):
    """LinkBaseDAO keeping link records in a dict."""

    def __init__(self):
        self.records: dict[str, dict] = {}
        self.deadlines: dict[str, datetime.datetime] = {}

    def _now(self) -> datetime.datetime:
        return datetime.datetime.now(datetime.UTC)

    def _live(self, linkid: str) -> dict | None:
        deadline = self.deadlines.get(linkid)
        if deadline is not None and self._now() >= deadline:
            self.records.pop(linkid, None)
            self.deadlines.pop(linkid, None)
        return self.records.get(linkid)

    def _require(self, linkid: str) -> dict:
        record = self._live(linkid)
        if record is None:
            raise LinkNotFoundError(f"Link with id '{linkid}' not found.")
        return record

    def _set_deadline(self, linkid: str, seconds: int) -> None:
        self.deadlines[linkid] = self._now() + datetime.timedelta(seconds=seconds)

    def exists(self, linkid, **kwargs):
        return self._live(linkid) is not None

    def insert(self, link, expire=None, **kwargs):
        self.records[link.linkid] = {
            'url': link.url,
            'baseUrl': link.base_url,
            'accessed': link.accessed,
            'createdAt': link.created_at.isoformat(),
            'token': link.token,
        }
        self.deadlines.pop(link.linkid, None)
        if expire is not None:
            self._set_deadline(link.linkid, expire)
        return self

    def expire(self, linkid, seconds, **kwargs):
        self._require(linkid)
        self._set_deadline(linkid, seconds)
        return self

    def resolve(self, linkid, **kwargs):
        record = self._require(linkid)
        record['accessed'] += 1
        return record['accessed'], record['url']

    def owner_token(self, linkid, **kwargs):
        return self._require(linkid)['token']

    def update_url(self, linkid, url, expire=None, **kwargs):
        self._require(linkid)['url'] = url
        if expire is not None:
            self._set_deadline(linkid, expire)
        return self

    def delete(self, linkid, **kwargs):
        if self._live(linkid) is None:
            return 0
        del self.records[linkid]
        self.deadlines.pop(linkid, None)
        return 1


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def links() -> InMemoryLinkDAO:
    return InMemoryLinkDAO()


@pytest.fixture
def app_context(links) -> AppContext:
    return AppContext(links=links, base_url='https://sho.rt')


@pytest.fixture
def session() -> Session:
    return Session(token=TOKEN)


@pytest.fixture
def stored_link(links) -> LinkModel:
    """A link owned by TOKEN, already in the store."""
    link = LinkModel(linkid='abc1234', url='https://example.com/a', base_url='https://sho.rt', token=TOKEN)
    links.insert(link)
    return link


@pytest.fixture
def make_event():
    """Build an API Gateway proxy event."""

    def _make_event(method: str = 'GET', linkid: str | None = None, body=None, headers: dict | None = None) -> LambdaEvent:
        event = {
            'resource': '/' if linkid is None else '/{linkid}',
            'httpMethod': method,
            'path': '/' if linkid is None else f'/{linkid}',
            'headers': headers or {},
            'pathParameters': None if linkid is None else {'linkid': linkid},
            'requestContext': {'domainName': 'abc.execute-api.eu-central-1.amazonaws.com', 'stage': 'Prod'},
            'body': body if body is None or isinstance(body, str) else json.dumps(body),
            'isBase64Encoded': False,
        }
        return cast(LambdaEvent, event)

    return _make_event
