import httpx
import pytest
from meter_dash.domain.periods import MetricKind, Period
from meter_dash.infrastructure.metering.client import (
    SERIES_ENDPOINT,
    TOTAL_ENDPOINT,
    MeteringClient,
)
from meter_dash.infrastructure.metering.errors import (
    DecodeError,
    FetchError,
    NetworkError,
    ServerError,
)


def _client(handler) -> MeteringClient:
    http = httpx.AsyncClient(
        base_url="http://metering.test", transport=httpx.MockTransport(handler)
    )
    return MeteringClient(client=http)


@pytest.mark.asyncio
async def test_fetch_total_decodes_and_tags_requested_period(sample_total_payload):
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=sample_total_payload)

    client = _client(handler)
    metric = await client.fetch_total("day")

    assert seen[0].url.path == TOTAL_ENDPOINT
    assert seen[0].url.params["period"] == "day"
    assert metric.period is Period.DAY
    assert metric.volume_value == 1234.5
    assert metric.money_value == 98.76


@pytest.mark.asyncio
async def test_total_attributed_to_request_not_echo(sample_total_payload):
    payload = dict(sample_total_payload, period="year")
    client = _client(lambda request: httpx.Response(200, json=payload))

    metric = await client.fetch_total(Period.MONTH)

    assert metric.period is Period.MONTH


@pytest.mark.asyncio
async def test_fetch_series_sends_kind_and_keeps_order(sample_series_payload):
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=sample_series_payload)

    client = _client(handler)
    points = await client.fetch_series(MetricKind.MONEY, Period.WEEK)

    assert seen[0].url.path == SERIES_ENDPOINT
    assert seen[0].url.params["type"] == "money"
    assert seen[0].url.params["period"] == "week"
    assert [p.timestamp for p in points] == [
        "2024-05-03T00:00:00",
        "2024-05-02T00:00:00",
    ]
    assert points[0].value == 310.0


@pytest.mark.asyncio
async def test_empty_series_is_valid():
    client = _client(lambda request: httpx.Response(200, json=[]))
    assert await client.fetch_series("liters", "second") == []


@pytest.mark.asyncio
async def test_series_rejects_periods_without_endpoint():
    calls = []
    client = _client(lambda request: calls.append(request) or httpx.Response(200))

    with pytest.raises(ValueError):
        await client.fetch_series(MetricKind.LITERS, Period.MINUTE)
    assert calls == []


@pytest.mark.asyncio
async def test_non_success_status_is_server_error():
    client = _client(lambda request: httpx.Response(503, text="down"))

    with pytest.raises(ServerError) as exc_info:
        await client.fetch_total("day")
    assert exc_info.value.status_code == 503
    assert exc_info.value.kind == "server"
    assert exc_info.value.endpoint == TOTAL_ENDPOINT


@pytest.mark.asyncio
async def test_invalid_json_is_decode_error():
    client = _client(lambda request: httpx.Response(200, text="<html>nope"))

    with pytest.raises(DecodeError):
        await client.fetch_total("day")


@pytest.mark.asyncio
async def test_unexpected_shape_is_decode_error():
    client = _client(lambda request: httpx.Response(200, json={"total": 1}))

    with pytest.raises(DecodeError):
        await client.fetch_total("day")
    with pytest.raises(DecodeError):
        await client.fetch_series("liters", "day")


@pytest.mark.asyncio
async def test_transport_failure_is_network_error():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(NetworkError) as exc_info:
        await client.fetch_total("day")
    assert isinstance(exc_info.value, FetchError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_issues_exactly_one_request_on_failure():
    calls = []

    def handler(request: httpx.Request):
        calls.append(request)
        return httpx.Response(500)

    client = _client(handler)
    with pytest.raises(ServerError):
        await client.fetch("/volume-total", {"period": "day"})
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open():
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
    )
    client = MeteringClient(client=http)
    await client.close()

    assert not http.is_closed
    await http.aclose()
