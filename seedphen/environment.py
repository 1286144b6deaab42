"""Synthetic hourly forcing.

Builds hourly temperature and soil-moisture series for scenarios and
tests without reading any data files.

Temperature uses an annual cosine cycle plus a diurnal cosine cycle:

  T(h) = T_mean + A_year × cos(2π × (h/24 − d_peak) / 365)
                + A_day  × cos(2π × (h mod 24 − h_peak) / 24)

with h the 0-indexed hour. Moisture is a dry baseline broken by
regular rain pulses of fixed length.
"""

from __future__ import annotations

import numpy as np

from seedphen.types import HOURS_PER_DAY

DAYS_PER_YEAR = 365

# Mid-July warm peak and mid-afternoon daily maximum
_TEMP_PEAK_DOY = 196
_TEMP_PEAK_HOUR = 15


def constant_series(value: float, n_hours: int) -> np.ndarray:
    """Hourly series holding a single value."""
    if n_hours < 0:
        raise ValueError(f"n_hours must be non-negative, got {n_hours}")
    return np.full(n_hours, value, dtype=np.float64)


def hourly_temperature_series(
    n_days: int,
    mean_temp: float,
    annual_amplitude: float,
    diurnal_amplitude: float = 0.0,
    peak_doy: int = _TEMP_PEAK_DOY,
    peak_hour: int = _TEMP_PEAK_HOUR,
) -> np.ndarray:
    """Generate an hourly temperature series.

    Args:
        n_days: Number of days.
        mean_temp: Annual mean temperature (°C).
        annual_amplitude: Half-range of the annual cycle (°C).
        diurnal_amplitude: Half-range of the daily cycle (°C).
        peak_doy: 0-indexed day of year of the annual maximum.
        peak_hour: Hour of day of the daily maximum.

    Returns:
        1-D array of shape (n_days * 24,).
    """
    if n_days < 0:
        raise ValueError(f"n_days must be non-negative, got {n_days}")
    hours = np.arange(n_days * HOURS_PER_DAY, dtype=np.float64)
    annual = np.cos(2.0 * np.pi * (hours / HOURS_PER_DAY - peak_doy) / DAYS_PER_YEAR)
    diurnal = np.cos(2.0 * np.pi * (hours % HOURS_PER_DAY - peak_hour) / HOURS_PER_DAY)
    return mean_temp + annual_amplitude * annual + diurnal_amplitude * diurnal


def rain_pulse_moisture_series(
    n_days: int,
    dry_value: float,
    wet_value: float,
    interval_days: int,
    wet_hours: int,
    first_day: int = 0,
) -> np.ndarray:
    """Generate an hourly soil-moisture series with periodic rain pulses.

    Every `interval_days` days, starting on 0-indexed day `first_day`,
    the first `wet_hours` hours of that day take wet_value; all other
    hours take dry_value.
    """
    if interval_days < 1:
        raise ValueError(f"interval_days must be >= 1, got {interval_days}")
    if not 0 <= wet_hours <= interval_days * HOURS_PER_DAY:
        raise ValueError(
            f"wet_hours must be in [0, {interval_days * HOURS_PER_DAY}], "
            f"got {wet_hours}"
        )
    series = constant_series(dry_value, n_days * HOURS_PER_DAY)
    for day in range(first_day, n_days, interval_days):
        onset = day * HOURS_PER_DAY
        series[onset:onset + wet_hours] = wet_value
    return series
