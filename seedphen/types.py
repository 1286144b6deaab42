"""Core data types for seedphen.

This module holds:
  - Time and sentinel constants shared by the models
  - Afterripening reference conditions used to normalize dormancy loss
  - Result objects returned by the germination, dispersal and
    lifecycle runs

Indices into hourly input series are 1-based throughout the public API,
matching the published model: hour 1 is the first sample, and the
germination day of absolute hour t is t // 24 + 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


# ═══════════════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════════════

HOURS_PER_DAY = 24

NOT_GERMINATED = 0     # germination_day value for a class that never germinated
NO_DISPERSAL = -1      # dispersal_time when the threshold is never reached

# Reference conditions defining one "saturated" afterripening hour:
# 20 °C at -200 MPa, with the paper's default T_bar / psi_l / psi_u.
AR_REF_TEMPERATURE = 20.0
AR_REF_MOISTURE = -200.0
AR_REF_T_BAR = 3.0
AR_REF_PSI_L = -350.0
AR_REF_PSI_U = -50.0


# ═══════════════════════════════════════════════════════════════════════
# RESULTS
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class GerminationResult:
    """Outcome of one germination run.

    germination_days / fraction_of_seeds only cover classes that
    germinated; the weight of classes still at NOT_GERMINATED when the
    data ran out is reported separately as ungerminated_fraction.
    """
    germination_days: np.ndarray       # (n_days,) int, ascending, all >= 1
    fraction_of_seeds: np.ndarray      # (n_days,) float, seed weight per day
    germination_day: np.ndarray        # (n_classes,) int, 0 = never
    seed_weights: np.ndarray           # (n_classes,) float, sums to 1
    final_psi: np.ndarray              # (n_classes,)
    final_htu: np.ndarray              # (n_classes,)
    ungerminated_fraction: float = 0.0
    hours_run: int = 0
    psi_history: Optional[np.ndarray] = None   # (hours_run, n_classes) if stored
    htu_history: Optional[np.ndarray] = None   # (hours_run, n_classes) if stored

    @property
    def germinated_fraction(self) -> float:
        return float(self.fraction_of_seeds.sum())

    @property
    def all_germinated(self) -> bool:
        return bool(np.all(self.germination_day != NOT_GERMINATED))


@dataclass
class DispersalResult:
    """Outcome of one dispersal run."""
    dispersal_time: int                # 1-based index, or NO_DISPERSAL
    total_thermal_units: float = 0.0
    progress: Optional[np.ndarray] = None      # (hours,) running totals if stored

    @property
    def dispersed(self) -> bool:
        return self.dispersal_time != NO_DISPERSAL


@dataclass
class LifecycleResult:
    """Flowering → dispersal → germination for one flowering hour."""
    flowering_start: int
    dispersal: DispersalResult
    germination: Optional[GerminationResult] = None   # None if never dispersed
