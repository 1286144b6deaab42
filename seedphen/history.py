"""Optional hourly state recording.

Records one snapshot per simulated hour (per-class psi or HTU vectors,
or a scalar running total) for external plotting and diagnostics.

Usage:
    recorder = HistoryRecorder(enabled=cfg.store_htu)

    # In the hourly loop:
    recorder.capture(htu)

    # After the run:
    htu_history = recorder.to_array()   # None when disabled
"""

from __future__ import annotations

from typing import List, Optional, Union

import numpy as np


class HistoryRecorder:
    """Append-only per-hour snapshot store.

    When enabled=False, all methods are no-ops and to_array() returns None.
    """

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self._snapshots: List[np.ndarray] = []

    def __len__(self) -> int:
        return len(self._snapshots)

    def capture(self, values: Union[float, np.ndarray]) -> None:
        """Append a copy of the current values."""
        if not self.enabled:
            return
        self._snapshots.append(np.array(values, dtype=np.float64, copy=True))

    def to_array(self) -> Optional[np.ndarray]:
        """Stack snapshots along a leading hour axis.

        Vector snapshots give (hours, n); scalar snapshots give (hours,).
        """
        if not self.enabled:
            return None
        if not self._snapshots:
            return np.empty(0, dtype=np.float64)
        return np.stack(self._snapshots)
