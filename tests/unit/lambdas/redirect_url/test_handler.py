import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from shortlinks import context
from shortlinks.lambdas.redirect_url import app
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.utils import Session


class TestRedirectUrlHandler:

    def test_handle(self, make_event, app_context, session, stored_link) -> None:
        response = app.handle(make_event('GET', linkid='abc1234'), app_context, session)

        # Assert Lambda successfully redirects user to target URL
        assert response['statusCode'] == 301
        assert response['headers']['Location'] == 'https://example.com/a'
        assert response['headers']['X-Accessed'] == '1'

    def test_handle_counts_every_access(self, make_event, app_context, session, stored_link, links) -> None:
        counts = [app.handle(make_event('GET', linkid='abc1234'), app_context, session)['headers']['X-Accessed'] for _ in range(3)]

        assert counts == ['1', '2', '3']
        assert links.records['abc1234']['accessed'] == 3

    def test_handle_without_authorization(self, make_event, app_context, stored_link) -> None:
        """Redirects don't depend on who asks."""
        response = app.handle(make_event('GET', linkid='abc1234'), app_context, Session(token='Z' * 30, persist=True))

        assert response['statusCode'] == 301

    def test_handle_with_unknown_link(self, make_event, app_context, session, links) -> None:
        response = app.handle(make_event('GET', linkid='nope123'), app_context, session)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['errorCode'] == 'LINK_NOT_FOUND'
        # Assert unknown links are never created by counting
        assert links.records == {}

    @pytest.mark.parametrize('linkid', [None, 'short', 'waytoolong', 'abc.123'])
    def test_handle_with_malformed_linkid(self, make_event, app_context, session, linkid) -> None:
        event = make_event('GET', linkid=linkid)

        response = app.handle(event, app_context, session)
        body = json.loads(response['body'])

        assert response['statusCode'] == 422
        assert body['errorCode'] == 'INVALID_LINKID'

    def test_handle_with_expired_link(self, make_event, app_context, session, stored_link, links) -> None:
        with freeze_time('2026-10-18 12:00:00') as frozen:
            links.expire('abc1234', 1)
            assert app.handle(make_event('GET', linkid='abc1234'), app_context, session)['statusCode'] == 301

            frozen.tick(timedelta(seconds=2))
            response = app.handle(make_event('GET', linkid='abc1234'), app_context, session)

        assert response['statusCode'] == 404

    def test_handle_with_unreachable_data_store(self, monkeypatch: MonkeyPatch, make_event, app_context, session, links) -> None:
        monkeypatch.setattr(links, 'resolve', MagicMock(side_effect=DataStoreError("Can't connect to Redis at localhost:6379/0.")))

        response = app.handle(make_event('GET', linkid='abc1234'), app_context, session)
        body = json.loads(response['body'])

        assert response['statusCode'] == 503
        assert body['errorCode'] == 'DATA_STORE_UNAVAILABLE'

    def test_lambda_handler(self, monkeypatch: MonkeyPatch, make_event, app_context, stored_link) -> None:
        monkeypatch.setattr(context, 'build_context', lambda name: app_context)

        response = app.lambda_handler(make_event('GET', linkid='abc1234', headers={'Cookie': f'shortlinks_session={stored_link.token}'}), None)

        assert response['statusCode'] == 301
        assert response['headers']['Location'] == 'https://example.com/a'
        assert 'Set-Cookie' not in response['headers']

    def test_lambda_handler_with_unexpected_error(self, monkeypatch: MonkeyPatch, make_event, app_context, links) -> None:
        monkeypatch.setattr('shortlinks.utils.helpers.running_locally', lambda: False)
        monkeypatch.setattr(context, 'build_context', lambda name: app_context)
        monkeypatch.setattr(links, 'resolve', MagicMock(side_effect=RuntimeError('Something goes wrong')))

        response = app.lambda_handler(make_event('GET', linkid='abc1234'), None)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'
        assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
