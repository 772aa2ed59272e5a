from meter_dash.domain.models import DashboardSnapshot, PeriodSelectionView
from meter_dash.state.selection import PeriodSelection
from meter_dash.state.store import ViewState


def project(
    state: ViewState, selection: PeriodSelection, loading: bool
) -> DashboardSnapshot:
    """Derive the presentation snapshot from the latest committed writes.

    Lists are copied so the snapshot stays consistent while polling continues.
    """
    return DashboardSnapshot(
        loading=loading,
        periods=PeriodSelectionView(**selection.snapshot()),
        volume_total=state.volume_total,
        money_total=state.money_total,
        volume_series=list(state.volume_series),
        money_series=list(state.money_series),
        realtime_window=state.realtime_window.snapshot(),
    )
