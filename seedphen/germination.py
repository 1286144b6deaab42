"""Hydrothermal-time seed germination model.

Seed germination model of Burghardt et al. (2015), "Modeling the
influence of genetic and environmental variation on the expression of
plant life cycles across landscapes", The American Naturalist.

A seed cohort is split into dormancy classes. Each hour is either:
  - DRY (moisture <= psi_max): every class loses dormancy through
    afterripening, psi ← max(psi − arHTU · psi_scale / arSaturate, psi_min);
    HTU is unchanged.
  - WET (moisture > psi_max): every class accumulates hydrothermal time,
    sub-optimal  (T_bg < T <= T_o): (ψ − psi) · (T − T_bg)
    supra-optimal (T > T_o):        (ψ − psi − k_T·(T − T_o)) · (T_o − T_bg)
    each only where its moisture term is positive; psi is unchanged.

A class germinates on the first hour its HTU exceeds the threshold.
Classes are weighted by a standard normal density sampled on [−3, 3].

All per-class functions operate element-wise on a fixed-size
(n_seed_classes,) array, and equally on a scalar psi for a single class.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from seedphen.config import GerminationSection, validate_germination
from seedphen.history import HistoryRecorder
from seedphen.types import (
    AR_REF_MOISTURE,
    AR_REF_PSI_L,
    AR_REF_PSI_U,
    AR_REF_T_BAR,
    AR_REF_TEMPERATURE,
    HOURS_PER_DAY,
    NOT_GERMINATED,
    GerminationResult,
)

logger = logging.getLogger(__name__)

ArrayLike = Union[float, np.ndarray]


# ═══════════════════════════════════════════════════════════════════════
# INITIAL STATE
# ═══════════════════════════════════════════════════════════════════════

def initial_dormancy(cfg: GerminationSection) -> np.ndarray:
    """Evenly spaced initial psi per class over psi_mean ± psi_breadth/2.

    A single class takes the upper endpoint, psi_mean + psi_breadth/2.
    """
    half = cfg.psi_breadth / 2.0
    if cfg.n_seed_classes == 1:
        return np.array([cfg.psi_mean + half], dtype=np.float64)
    return np.linspace(cfg.psi_mean - half, cfg.psi_mean + half,
                       cfg.n_seed_classes)


def seed_class_weights(n_seed_classes: int) -> np.ndarray:
    """Relative population weight of each dormancy class.

    Standard normal density at n evenly spaced points on [−3, 3],
    normalized to sum to 1.
    """
    if n_seed_classes < 1:
        raise ValueError(f"n_seed_classes must be >= 1, got {n_seed_classes}")
    if n_seed_classes == 1:
        return np.ones(1, dtype=np.float64)
    z = np.linspace(-3.0, 3.0, n_seed_classes)
    density = np.exp(-0.5 * z * z) / np.sqrt(2.0 * np.pi)
    return density / density.sum()


# ═══════════════════════════════════════════════════════════════════════
# AFTERRIPENING
# ═══════════════════════════════════════════════════════════════════════

def ar_htu(temperature: float, moisture: float, T_bar: float,
           psi_l: float, psi_u: float) -> float:
    """Afterripening heat units for one hour.

    Zero unless temperature > T_bar. Inside the moisture window
    [psi_l, psi_u] the thermal excess is scaled linearly from 0 at psi_l
    to 1 at psi_u; above psi_u the full excess counts.

    Args:
        temperature: Hourly temperature (°C).
        moisture: Hourly soil water potential (MPa).
        T_bar: Base temperature for afterripening (°C).
        psi_l: Lower moisture limit for afterripening.
        psi_u: Upper moisture limit for afterripening.

    Returns:
        Afterripening heat units (>= 0 for psi_l < psi_u).
    """
    if temperature <= T_bar:
        return 0.0
    if moisture > psi_u:
        return temperature - T_bar
    if moisture >= psi_l:
        return ((psi_l - moisture) / (psi_l - psi_u)) * (temperature - T_bar)
    return 0.0


def ar_saturation(d_sat: float) -> float:
    """Afterripening heat units accumulated over d_sat reference days."""
    per_hour = ar_htu(AR_REF_TEMPERATURE, AR_REF_MOISTURE, AR_REF_T_BAR,
                      AR_REF_PSI_L, AR_REF_PSI_U)
    return per_hour * HOURS_PER_DAY * d_sat


def afterripening_loss(psi: ArrayLike, temperature: float, moisture: float,
                       cfg: GerminationSection) -> np.ndarray:
    """New psi after one dry hour of afterripening.

    The decrement is the same for every class; the psi_min floor is
    applied per class.
    """
    decrement = (ar_htu(temperature, moisture, cfg.T_bar, cfg.psi_l, cfg.psi_u)
                 * (cfg.psi_scale / ar_saturation(cfg.d_sat)))
    return np.maximum(np.asarray(psi, dtype=np.float64) - decrement, cfg.psi_min)


# ═══════════════════════════════════════════════════════════════════════
# HYDROTHERMAL TIME
# ═══════════════════════════════════════════════════════════════════════

def germination_htu(psi: ArrayLike, temperature: float, moisture: float,
                    cfg: GerminationSection) -> np.ndarray:
    """Hydrothermal time gained by each class during one wet hour.

    Sub-optimal and supra-optimal contributions are evaluated
    independently and summed; each is zero where its condition fails.
    """
    psi = np.asarray(psi, dtype=np.float64)

    sub_optimal = (psi < moisture) & (cfg.T_bg < temperature) & (temperature <= cfg.T_o)
    added = np.where(sub_optimal, (moisture - psi) * (temperature - cfg.T_bg), 0.0)

    m_psi = psi + cfg.k_T * (temperature - cfg.T_o)
    supra_optimal = (temperature > cfg.T_o) & (m_psi < moisture)
    added = added + np.where(supra_optimal, (moisture - m_psi) * (cfg.T_o - cfg.T_bg), 0.0)

    return added


def is_wet(moisture: float, cfg: GerminationSection) -> bool:
    """Seeds are imbibed when moisture exceeds psi_max."""
    return moisture > cfg.psi_max


def next_germination_step(
    psi: np.ndarray,
    htu: np.ndarray,
    temperature: float,
    moisture: float,
    cfg: GerminationSection,
) -> Tuple[np.ndarray, np.ndarray]:
    """Advance every class by one hour.

    Exactly one of psi (dry hour) or htu (wet hour) changes; the
    wet/dry choice is shared by all classes. Inputs are not modified.

    Returns:
        (new_psi, new_htu)
    """
    if is_wet(moisture, cfg):
        return psi.copy(), htu + germination_htu(psi, temperature, moisture, cfg)
    return afterripening_loss(psi, temperature, moisture, cfg), htu.copy()


# ═══════════════════════════════════════════════════════════════════════
# AGGREGATION
# ═══════════════════════════════════════════════════════════════════════

def germination_day(hour: int) -> int:
    """1-based day for an absolute 1-based hour index."""
    return hour // HOURS_PER_DAY + 1


def aggregate_germination(
    germination_days_per_class: np.ndarray,
    seed_weights: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """Sum class weights per distinct germination day.

    Returns:
        (days, fractions, ungerminated_fraction). days is ascending and
        excludes NOT_GERMINATED; that weight is returned separately.
    """
    germinated = germination_days_per_class != NOT_GERMINATED
    days = np.unique(germination_days_per_class[germinated])
    fractions = np.array(
        [seed_weights[germination_days_per_class == d].sum() for d in days],
        dtype=np.float64,
    )
    ungerminated = float(seed_weights[~germinated].sum())
    return days, fractions, ungerminated


# ═══════════════════════════════════════════════════════════════════════
# RUN
# ═══════════════════════════════════════════════════════════════════════

def _check_series(
    temperature: Sequence[float],
    moisture: Optional[Sequence[float]],
    start: int,
) -> Tuple[np.ndarray, Optional[np.ndarray], int]:
    """Coerce hourly inputs to 1-D arrays and check the start index."""
    temperature = np.asarray(temperature, dtype=np.float64)
    if temperature.ndim != 1:
        raise ValueError(
            f"temperature must be 1-D, got shape {temperature.shape}"
        )
    if temperature.size == 0:
        raise ValueError("temperature must not be empty")
    if moisture is not None:
        moisture = np.asarray(moisture, dtype=np.float64)
        if moisture.shape != temperature.shape:
            raise ValueError(
                f"temperature and moisture must have equal length, got "
                f"{temperature.size} and {moisture.size}"
            )
    if isinstance(start, bool) or int(start) != start:
        raise ValueError(f"start must be an integer index, got {start!r}")
    if not 1 <= start <= temperature.size:
        raise ValueError(
            f"start must be in [1, {temperature.size}], got {start}"
        )
    return temperature, moisture, int(start)


def run_germination(
    temperature: Sequence[float],
    moisture: Sequence[float],
    start: int = 1,
    cfg: Optional[GerminationSection] = None,
) -> GerminationResult:
    """Run the germination model over hourly forcing.

    Args:
        temperature: Hourly temperature (°C).
        moisture: Hourly soil water potential (MPa), same length.
        start: 1-based hour at which the seeds are dispersed.
        cfg: Germination parameters (defaults if None).

    Returns:
        GerminationResult. If the data ends before every class germinates,
        fraction_of_seeds sums to less than 1 and the remainder is in
        ungerminated_fraction.

    Raises:
        ValueError: On invalid parameters or inputs.
    """
    if cfg is None:
        cfg = GerminationSection()
    validate_germination(cfg)
    temperature, moisture, start = _check_series(temperature, moisture, start)
    n_hours = temperature.size

    psi = initial_dormancy(cfg)
    htu = np.zeros(cfg.n_seed_classes, dtype=np.float64)
    day = np.full(cfg.n_seed_classes, NOT_GERMINATED, dtype=np.int64)
    weights = seed_class_weights(cfg.n_seed_classes)

    psi_recorder = HistoryRecorder(enabled=cfg.store_psi)
    htu_recorder = HistoryRecorder(enabled=cfg.store_htu)

    logger.debug("Germination run: hours %d..%d, %d seed classes",
                 start, n_hours, cfg.n_seed_classes)

    hours_run = 0
    for t in range(start, n_hours + 1):
        psi, htu = next_germination_step(
            psi, htu, temperature[t - 1], moisture[t - 1], cfg)
        hours_run += 1

        newly = (day == NOT_GERMINATED) & (htu > cfg.threshold)
        day[newly] = germination_day(t)

        htu_recorder.capture(htu)
        psi_recorder.capture(psi)

        if np.all(day != NOT_GERMINATED):
            logger.debug("All seed classes germinated by hour %d", t)
            break

    days, fractions, ungerminated = aggregate_germination(day, weights)

    return GerminationResult(
        germination_days=days,
        fraction_of_seeds=fractions,
        germination_day=day,
        seed_weights=weights,
        final_psi=psi,
        final_htu=htu,
        ungerminated_fraction=ungerminated,
        hours_run=hours_run,
        psi_history=psi_recorder.to_array(),
        htu_history=htu_recorder.to_array(),
    )


class GerminationModel:
    """Fixed germination parameterization reusable across runs.

    No per-run state is kept on the instance, so one model can be shared
    freely; recorded histories come back on each GerminationResult.
    """

    def __init__(self, cfg: Optional[GerminationSection] = None):
        self.cfg = cfg if cfg is not None else GerminationSection()
        validate_germination(self.cfg)

    def run(self, temperature: Sequence[float], moisture: Sequence[float],
            start: int = 1) -> GerminationResult:
        return run_germination(temperature, moisture, start, self.cfg)
