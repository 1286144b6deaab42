"""Flowering → dispersal → germination chaining.

The dispersal and germination models share no state; this module only
feeds the hour returned by one into the other. Seeds enter the soil at
the dispersal hour, so the germination clock starts there. Germination
days stay absolute (relative to hour 1 of the series).
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from seedphen.config import ModelConfig, default_config
from seedphen.dispersal import run_dispersal
from seedphen.germination import run_germination
from seedphen.types import LifecycleResult

logger = logging.getLogger(__name__)


def run_lifecycle(
    temperature: Sequence[float],
    moisture: Sequence[float],
    flowering_start: int,
    config: Optional[ModelConfig] = None,
) -> LifecycleResult:
    """Disperse seeds from a flowering hour, then germinate them.

    Args:
        temperature: Hourly temperature (°C).
        moisture: Hourly soil water potential (MPa), same length.
        flowering_start: 1-based flowering hour.
        config: Model configuration (defaults if None).

    Returns:
        LifecycleResult; germination is None if dispersal never occurred.
    """
    if config is None:
        config = default_config()

    dispersal = run_dispersal(temperature, flowering_start, config.dispersal)
    if not dispersal.dispersed:
        logger.warning(
            "No dispersal from flowering hour %d (%.1f of %.1f thermal units); "
            "skipping germination",
            flowering_start, dispersal.total_thermal_units,
            config.dispersal.threshold,
        )
        return LifecycleResult(flowering_start=flowering_start, dispersal=dispersal)

    germination = run_germination(
        temperature, moisture, dispersal.dispersal_time, config.germination)
    logger.info(
        "Flowering hour %d: dispersed at hour %d, %.3f of seeds germinated",
        flowering_start, dispersal.dispersal_time,
        germination.germinated_fraction,
    )
    return LifecycleResult(
        flowering_start=flowering_start,
        dispersal=dispersal,
        germination=germination,
    )


def run_lifecycle_sweep(
    temperature: Sequence[float],
    moisture: Sequence[float],
    flowering_starts: Iterable[int],
    config: Optional[ModelConfig] = None,
) -> List[LifecycleResult]:
    """run_lifecycle for each flowering hour, in the order given."""
    if config is None:
        config = default_config()
    return [
        run_lifecycle(temperature, moisture, start, config)
        for start in flowering_starts
    ]
