import pytest
from meter_dash.domain.models import RealtimeSample
from meter_dash.state.window import SlidingWindow


def _sample(i: int) -> RealtimeSample:
    return RealtimeSample(timestamp=f"t_{i}", value=float(i))


@pytest.mark.parametrize("count", [0, 1, 59, 60, 61, 150])
def test_window_keeps_trailing_samples_in_order(count):
    window = SlidingWindow(60)
    for i in range(1, count + 1):
        window.append(_sample(i))

    kept = window.snapshot()
    assert len(kept) == min(count, 60)
    expected = list(range(max(1, count - 59), count + 1)) if count else []
    assert [s.value for s in kept] == [float(i) for i in expected]


def test_sixty_first_append_evicts_oldest():
    window = SlidingWindow(60)
    evicted = [window.append(_sample(i)) for i in range(1, 62)]

    assert evicted[:60] == [0] * 60
    assert evicted[60] == 1
    assert window.snapshot()[0].timestamp == "t_2"
    assert window.snapshot()[-1].timestamp == "t_61"


def test_duplicate_timestamps_are_kept():
    window = SlidingWindow(3)
    window.append(RealtimeSample(timestamp="t", value=1.0))
    window.append(RealtimeSample(timestamp="t", value=2.0))

    assert len(window) == 2


def test_snapshot_is_detached_from_window():
    window = SlidingWindow(2)
    window.append(_sample(1))
    snap = window.snapshot()
    window.append(_sample(2))
    window.append(_sample(3))

    assert [s.timestamp for s in snap] == ["t_1"]
    assert [s.timestamp for s in window] == ["t_2", "t_3"]


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        SlidingWindow(0)
