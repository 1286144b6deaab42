"""Tests for seedphen.lifecycle — flowering → dispersal → germination."""

import logging

import numpy as np
import pytest

from seedphen.config import DispersalSection, GerminationSection, ModelConfig
from seedphen.environment import constant_series
from seedphen.germination import run_germination
from seedphen.lifecycle import run_lifecycle, run_lifecycle_sweep


@pytest.fixture
def config() -> ModelConfig:
    return ModelConfig(
        germination=GerminationSection(),
        dispersal=DispersalSection(threshold=70.0, T_b=3.0),
    )


@pytest.fixture
def forcing():
    n_hours = 24 * 40
    return constant_series(10.0, n_hours), constant_series(0.0, n_hours)


class TestRunLifecycle:
    def test_germination_starts_at_dispersal(self, config, forcing):
        temperature, moisture = forcing
        result = run_lifecycle(temperature, moisture, 5, config)

        assert result.flowering_start == 5
        assert result.dispersal.dispersal_time == 14
        direct = run_germination(temperature, moisture, 14, config.germination)
        np.testing.assert_array_equal(result.germination.germination_day,
                                      direct.germination_day)
        assert result.germination.hours_run == direct.hours_run

    def test_no_dispersal_skips_germination(self, forcing, caplog):
        temperature, moisture = forcing
        config = ModelConfig(dispersal=DispersalSection(threshold=1.0e9))
        with caplog.at_level(logging.WARNING, logger="seedphen.lifecycle"):
            result = run_lifecycle(temperature, moisture, 1, config)

        assert result.germination is None
        assert not result.dispersal.dispersed
        assert any("No dispersal" in rec.message for rec in caplog.records)

    def test_mismatched_moisture_rejected(self, config):
        with pytest.raises(ValueError, match="equal length"):
            run_lifecycle(constant_series(10.0, 48), constant_series(0.0, 47), 1, config)


class TestLifecycleSweep:
    def test_one_result_per_flowering_hour(self, config, forcing):
        temperature, moisture = forcing
        results = run_lifecycle_sweep(temperature, moisture, [1, 25, 49], config)

        assert [r.flowering_start for r in results] == [1, 25, 49]
        assert [r.dispersal.dispersal_time for r in results] == [10, 34, 58]

    def test_later_flowering_never_germinates_earlier(self, config, forcing):
        temperature, moisture = forcing
        results = run_lifecycle_sweep(temperature, moisture, range(1, 200, 24), config)
        first_days = [r.germination.germination_days[0] for r in results]
        assert first_days == sorted(first_days)
