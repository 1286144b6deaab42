"""Thermal-time seed dispersal model.

Seed dispersal model of Burghardt et al. (2015): a simple thermal-unit
summation from flowering. Degree-hours above the base temperature T_b
accumulate from the flowering hour; seeds disperse at the first hour
the running total reaches the threshold.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from seedphen.config import DispersalSection, validate_dispersal
from seedphen.germination import _check_series
from seedphen.history import HistoryRecorder
from seedphen.types import NO_DISPERSAL, DispersalResult

logger = logging.getLogger(__name__)


def thermal_units(temperature: float, T_b: float) -> float:
    """Degree-hours above T_b for one hour (0 at or below T_b)."""
    if temperature > T_b:
        return temperature - T_b
    return 0.0


def run_dispersal(
    temperature: Sequence[float],
    start: int = 1,
    cfg: Optional[DispersalSection] = None,
) -> DispersalResult:
    """Run the dispersal model from a flowering hour.

    Args:
        temperature: Hourly temperature (°C).
        start: 1-based index of the flowering hour.
        cfg: Dispersal parameters (defaults if None).

    Returns:
        DispersalResult whose dispersal_time is the 1-based index at which
        the running total first reaches cfg.threshold, or NO_DISPERSAL
        if the data ends first.
    """
    if cfg is None:
        cfg = DispersalSection()
    validate_dispersal(cfg)
    temperature, _, start = _check_series(temperature, None, start)

    recorder = HistoryRecorder(enabled=cfg.store_progress)
    total = 0.0
    for i in range(start, temperature.size + 1):
        total += thermal_units(temperature[i - 1], cfg.T_b)
        recorder.capture(total)
        if total >= cfg.threshold:
            logger.debug("Dispersal threshold %.1f reached at hour %d",
                         cfg.threshold, i)
            return DispersalResult(
                dispersal_time=i,
                total_thermal_units=total,
                progress=recorder.to_array(),
            )

    logger.debug("Dispersal threshold %.1f not reached (total %.1f)",
                 cfg.threshold, total)
    return DispersalResult(
        dispersal_time=NO_DISPERSAL,
        total_thermal_units=total,
        progress=recorder.to_array(),
    )


class DispersalModel:
    """Fixed dispersal parameterization reusable across runs."""

    def __init__(self, cfg: Optional[DispersalSection] = None):
        self.cfg = cfg if cfg is not None else DispersalSection()
        validate_dispersal(self.cfg)

    def run(self, temperature: Sequence[float], start: int = 1) -> DispersalResult:
        return run_dispersal(temperature, start, self.cfg)
