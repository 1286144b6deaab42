"""Tests for seedphen.config — configuration loading and validation."""

import dataclasses
from pathlib import Path

import pytest
import yaml

from seedphen.config import (
    DispersalSection,
    GerminationSection,
    ModelConfig,
    config_to_dict,
    deep_merge,
    default_config,
    load_config,
    validate_config,
    validate_germination,
)

DEFAULT_YAML = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


# ── deep_merge tests ──────────────────────────────────────────────────

class TestDeepMerge:
    def test_simple_override(self):
        assert deep_merge({'a': 1, 'b': 2}, {'b': 3}) == {'a': 1, 'b': 3}

    def test_nested_merge(self):
        base = {'x': {'a': 1, 'b': 2}, 'y': 10}
        result = deep_merge(base, {'x': {'b': 3, 'c': 4}})
        assert result == {'x': {'a': 1, 'b': 3, 'c': 4}, 'y': 10}

    def test_override_dict_with_scalar(self):
        assert deep_merge({'a': {'nested': 1}}, {'a': 'replaced'}) == {'a': 'replaced'}

    def test_empty_override(self):
        assert deep_merge({'a': 1}, {}) == {'a': 1}


# ── default_config tests ─────────────────────────────────────────────

class TestDefaultConfig:
    def test_creates_valid_config(self):
        assert isinstance(default_config(), ModelConfig)

    def test_germination_defaults(self):
        g = default_config().germination
        assert g.threshold == 1000.0
        assert (g.T_bg, g.T_o, g.k_T) == (3.0, 22.0, 0.12)
        assert (g.psi_mean, g.psi_min, g.psi_breadth) == (0.0, -1.0, 1.0)
        assert g.n_seed_classes == 11
        assert (g.T_bar, g.psi_max, g.psi_l, g.psi_u) == (3.0, -5.0, -350.0, -50.0)
        assert (g.d_sat, g.psi_scale) == (40.0, 1.0)
        assert not g.store_psi and not g.store_htu

    def test_dispersal_defaults(self):
        d = default_config().dispersal
        assert d.threshold == 8448.0
        assert d.T_b == 3.0
        assert not d.store_progress

    def test_sections_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            default_config().germination.threshold = 5.0

    def test_defaults_do_not_warn(self, recwarn):
        default_config()
        assert len(recwarn) == 0


# ── YAML loading tests ───────────────────────────────────────────────

class TestLoadConfig:
    def test_shipped_default_matches_dataclasses(self):
        assert load_config(DEFAULT_YAML) == ModelConfig()

    def test_load_partial_yaml(self, tmp_path):
        config_path = tmp_path / "partial.yaml"
        with open(config_path, 'w') as f:
            yaml.dump({'germination': {'threshold': 500.0, 'n_seed_classes': 5}}, f)

        config = load_config(config_path)
        assert config.germination.threshold == 500.0
        assert config.germination.n_seed_classes == 5
        # Unspecified fields and sections get defaults
        assert config.germination.T_o == 22.0
        assert config.dispersal == DispersalSection()

    def test_scenario_override(self, tmp_path):
        base_path = tmp_path / "base.yaml"
        scen_path = tmp_path / "scenario.yaml"
        with open(base_path, 'w') as f:
            yaml.dump({'dispersal': {'threshold': 8000.0, 'T_b': 4.0}}, f)
        with open(scen_path, 'w') as f:
            yaml.dump({'dispersal': {'threshold': 6000.0}}, f)

        config = load_config(base_path, scen_path)
        assert config.dispersal.threshold == 6000.0
        assert config.dispersal.T_b == 4.0

    def test_missing_scenario_is_skipped(self, tmp_path):
        config = load_config(DEFAULT_YAML, tmp_path / "nope.yaml")
        assert config == ModelConfig()

    def test_overrides_applied_last(self, tmp_path):
        config = load_config(DEFAULT_YAML, overrides={'germination': {'store_htu': True}})
        assert config.germination.store_htu

    def test_unknown_keys_ignored(self, tmp_path):
        config_path = tmp_path / "extra.yaml"
        with open(config_path, 'w') as f:
            yaml.dump({'germination': {'bogus': 1}, 'plotting': {'dpi': 300}}, f)
        assert load_config(config_path) == ModelConfig()

    def test_empty_file(self, tmp_path):
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")
        assert load_config(config_path) == ModelConfig()

    def test_missing_base(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_values_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="n_seed_classes"):
            load_config(DEFAULT_YAML, overrides={'germination': {'n_seed_classes': 0}})

    def test_round_trip_through_dict(self, tmp_path):
        config = ModelConfig(germination=GerminationSection(threshold=750.0))
        config_path = tmp_path / "dumped.yaml"
        with open(config_path, 'w') as f:
            yaml.safe_dump(config_to_dict(config), f)
        assert load_config(config_path) == config


# ── Validation tests ─────────────────────────────────────────────────

class TestValidation:
    @pytest.mark.parametrize("kwargs, match", [
        ({'n_seed_classes': 0}, "n_seed_classes"),
        ({'threshold': -1.0}, "threshold"),
        ({'psi_breadth': -0.1}, "psi_breadth"),
        ({'psi_l': -50.0, 'psi_u': -50.0}, "psi_l"),
        ({'d_sat': 0.0}, "d_sat"),
    ])
    def test_germination_errors(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            validate_germination(GerminationSection(**kwargs))

    def test_inverted_moisture_window_is_valid(self):
        """psi_l > psi_u never reaches the interpolation, so nothing divides by zero."""
        validate_germination(GerminationSection(psi_l=-10.0, psi_u=-50.0))

    def test_dispersal_negative_threshold(self):
        with pytest.raises(ValueError, match="dispersal.threshold"):
            validate_config(ModelConfig(dispersal=DispersalSection(threshold=-5.0)))

    def test_optimum_below_base_warns(self):
        with pytest.warns(UserWarning, match="T_o"):
            validate_germination(GerminationSection(T_o=3.0))

    def test_classes_below_floor_warn(self):
        with pytest.warns(UserWarning, match="psi_min"):
            validate_germination(GerminationSection(psi_breadth=4.0))

    def test_single_class_is_valid(self):
        validate_germination(GerminationSection(n_seed_classes=1))
