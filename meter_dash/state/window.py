from collections import deque
from typing import Deque, Iterator, List

from meter_dash.domain.models import RealtimeSample

DEFAULT_CAPACITY = 60


class SlidingWindow:
    """Count-bounded, append-only buffer of the most recent realtime samples.

    Samples are kept in arrival order. Once more than ``capacity`` have been
    appended the oldest ones are evicted, so the window always holds exactly
    the trailing ``min(appended, capacity)`` samples. No dedup by timestamp.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._samples: Deque[RealtimeSample] = deque()

    def append(self, sample: RealtimeSample) -> int:
        """Append sample and return how many samples were evicted."""
        self._samples.append(sample)
        evicted = 0
        while len(self._samples) > self.capacity:
            self._samples.popleft()
            evicted += 1
        return evicted

    def snapshot(self) -> List[RealtimeSample]:
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[RealtimeSample]:
        return iter(list(self._samples))
