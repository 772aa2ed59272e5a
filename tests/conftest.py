import pytest
from helpers.upstream import ManualClock, ScriptedClient


@pytest.fixture
def clock():
    """Simulated time; pass clock.sleep wherever asyncio.sleep is injectable."""
    return ManualClock()


@pytest.fixture
def upstream():
    """Scripted metering client recording every request."""
    return ScriptedClient()


@pytest.fixture
def sample_total_payload():
    return {"period": "day", "total_value_float": 1234.5, "total_value_money": 98.76}


@pytest.fixture
def sample_series_payload():
    return [
        {"period": "2024-05-03T00:00:00", "total_value": 310.0},
        {"period": "2024-05-02T00:00:00", "total_value": 295.5},
    ]
