from dataclasses import dataclass, field
from typing import List, Optional

from meter_dash.domain.models import SeriesPoint, TotalMetric

from .window import SlidingWindow


@dataclass
class ViewState:
    """Latest committed value of every view slot.

    Each attribute has exactly one writer: the poll loop of the matching view.
    """

    realtime_window: SlidingWindow
    volume_total: Optional[TotalMetric] = None
    money_total: Optional[TotalMetric] = None
    volume_series: List[SeriesPoint] = field(default_factory=list)
    money_series: List[SeriesPoint] = field(default_factory=list)
