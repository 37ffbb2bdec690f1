"""Tests for the Ethos API client.

The HTTP session is mocked; every transport failure must surface as
TransportDegradedError with the matching error code.
"""

import json
import socket
import time
from unittest.mock import Mock

import orjson
import pytest
import requests

from ethoscompare.config import EthosAPISettings
from ethoscompare.core.normalization import ResponseNormalizer
from ethoscompare.core.statistics import StatisticsCollector
from ethoscompare.services.ethos.ethos_client import EthosClient, create_session
from ethoscompare.shared.errors import ErrorCode, TransportDegradedError


def _response(payload, status_code: int = 200) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    body = payload if isinstance(payload, bytes) else orjson.dumps(payload)
    response.content = body
    response.json.side_effect = lambda: json.loads(body)
    return response


@pytest.fixture
def settings() -> EthosAPISettings:
    return EthosAPISettings(
        base_url="https://api.test/api/v2",
        legacy_base_url="https://api.test/api/v1/",
        timeout=2.0,
    )


@pytest.fixture
def session() -> Mock:
    return Mock(spec=requests.Session)


@pytest.fixture
def client(settings, session) -> EthosClient:
    return EthosClient(settings=settings, session=session)


class TestCreateSession:
    def test_client_header_and_retry_adapter(self, settings):
        session = create_session(settings)

        assert session.headers["X-Ethos-Client"] == settings.client_name
        assert session.headers["Accept"] == "application/json"
        retries = session.get_adapter("https://api.test").max_retries
        assert retries.total == settings.retry_attempts
        assert set(retries.status_forcelist) == {502, 503, 504}
        assert retries.status == settings.retry_attempts
        assert retries.connect == 0
        assert retries.read is False
        session.close()


class TestSearchLegacy:
    @pytest.mark.asyncio
    async def test_returns_records(self, client, session):
        # Given
        session.get.return_value = _response(
            {"ok": True, "data": {"values": [{"username": "alice", "profileId": 1}]}}
        )

        # When
        records = await client.search_legacy("alice", 10)

        # Then
        assert [record.username for record in records] == ["alice"]
        session.get.assert_called_once_with(
            "https://api.test/api/v1/search",
            params={"query": "alice", "limit": 10},
            timeout=2.0,
        )

    @pytest.mark.asyncio
    async def test_ok_false_is_transport_failure(self, client, session):
        session.get.return_value = _response({"ok": False, "error": "rate limited"})

        with pytest.raises(TransportDegradedError) as exc_info:
            await client.search_legacy("alice", 10)

        assert exc_info.value.code == ErrorCode.API_INVALID_RESPONSE


class TestTransportFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("side_effect", "code"),
        [
            (requests.exceptions.Timeout("slow"), ErrorCode.API_TIMEOUT),
            (requests.exceptions.ConnectionError("down"), ErrorCode.API_CONNECTION_ERROR),
            (requests.exceptions.TooManyRedirects("loop"), ErrorCode.API_REQUEST_FAILED),
        ],
    )
    async def test_request_exceptions_mapped(self, client, session, side_effect, code):
        session.get.side_effect = side_effect

        with pytest.raises(TransportDegradedError) as exc_info:
            await client.search_users("alice")

        assert exc_info.value.code == code
        assert exc_info.value.original_error is side_effect

    @pytest.mark.asyncio
    async def test_server_error_status(self, client, session):
        session.get.return_value = _response({}, status_code=503)

        with pytest.raises(TransportDegradedError) as exc_info:
            await client.get_score_level("profileId:1")

        assert exc_info.value.code == ErrorCode.API_SERVER_ERROR
        assert exc_info.value.context.additional_data == {"status_code": 503}

    @pytest.mark.asyncio
    async def test_client_error_status(self, client, session):
        session.get.return_value = _response({}, status_code=404)

        with pytest.raises(TransportDegradedError) as exc_info:
            await client.get_score_level("profileId:1")

        assert exc_info.value.code == ErrorCode.API_REQUEST_FAILED

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, client, session):
        session.get.return_value = _response(b"<html>oops</html>")

        with pytest.raises(TransportDegradedError) as exc_info:
            await client.search_users("alice")

        assert exc_info.value.code == ErrorCode.API_INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_non_object_body(self, client, session):
        session.get.return_value = _response([1, 2, 3])

        with pytest.raises(TransportDegradedError) as exc_info:
            await client.search_users("alice")

        assert exc_info.value.code == ErrorCode.API_INVALID_RESPONSE


class TestEnrichedAndLevel:
    @pytest.mark.asyncio
    async def test_search_users(self, client, session):
        session.get.return_value = _response(
            {"values": [{"username": "alice", "xpTotal": 99}]}
        )

        records = await client.search_users("alice")

        assert records[0].xp_total == 99
        assert session.get.call_args.args[0] == "https://api.test/api/v2/users/search"

    @pytest.mark.asyncio
    async def test_get_score_level(self, client, session):
        session.get.return_value = _response({"score": 1700, "level": "reputable"})

        assert await client.get_score_level("profileId:1") == "reputable"
        assert session.get.call_args.kwargs["params"] == {"userkey": "profileId:1"}


class TestStatisticsAndClose:
    @pytest.mark.asyncio
    async def test_calls_and_errors_recorded(self, settings, session):
        statistics = StatisticsCollector()
        client = EthosClient(settings=settings, session=session, statistics=statistics)
        session.get.side_effect = [
            _response({"values": []}),
            requests.exceptions.Timeout("slow"),
        ]

        await client.search_users("alice")
        with pytest.raises(TransportDegradedError):
            await client.search_users("alice")

        assert statistics.metrics.api_calls == 2
        assert statistics.metrics.api_errors == 1

    def test_close_closes_session(self, client, session):
        client.close()

        session.close.assert_called_once()


class TestLargeAmounts:
    @pytest.mark.asyncio
    async def test_numeric_amount_beyond_64_bits_kept_exact(
        self, client, session, make_legacy_record
    ):
        # Given: 25 ETH in wei as a bare JSON number
        session.get.return_value = _response(
            b'{"values":[{"username":"alice","stats":{"vouch":{"received":'
            b'{"count":1,"amountWeiTotal":25000000000000000000}}}}]}'
        )

        # When
        records = await client.search_users("alice")
        profile = ResponseNormalizer().normalize(make_legacy_record("alice"), records[0])

        # Then
        assert profile.vouches_received.amount_wei_total == "25000000000000000000"


@pytest.fixture
def silent_server():
    """Listening socket whose peer never receives a reply."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    try:
        yield f"http://127.0.0.1:{server.getsockname()[1]}"
    finally:
        server.close()


class TestBoundedTimeout:
    @pytest.mark.asyncio
    async def test_unanswered_request_times_out_once(self, silent_server):
        settings = EthosAPISettings(
            base_url=silent_server,
            legacy_base_url=silent_server,
            timeout=0.5,
            retry_backoff=0.0,
        )
        client = EthosClient(settings=settings)

        start = time.perf_counter()
        try:
            with pytest.raises(TransportDegradedError) as exc_info:
                await client.get_score_level("profileId:1")
        finally:
            client.close()
        elapsed = time.perf_counter() - start

        assert exc_info.value.code == ErrorCode.API_TIMEOUT
        assert elapsed < 2 * settings.timeout
