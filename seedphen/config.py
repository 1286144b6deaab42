"""Configuration system for seedphen.

YAML configuration with deep-merge support:
  base.yaml → scenario override → ad-hoc overrides

Parameter names keep the symbols of Burghardt et al. (2015) so that
values can be checked against the paper's tables directly.

References:
  - Burghardt et al. 2015, Am. Nat. 185(2), Table 1 (germination)
  - Burghardt et al. 2015, Am. Nat. 185(2), Appendix A (dispersal)
"""

from __future__ import annotations

import dataclasses
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION DATACLASSES
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class GerminationSection:
    """Hydrothermal-time germination model parameters.

    Seeds are split into n_seed_classes dormancy classes whose initial
    dormancy (psi) spans psi_mean ± psi_breadth/2. Dry hours relax
    dormancy by afterripening; wet hours accumulate hydrothermal time
    until a class exceeds `threshold`.
    """
    threshold: float = 1000.0     # HTU required to germinate

    # Temperature
    T_bg: float = 3.0             # Base temperature for germination (°C)
    T_o: float = 22.0             # Optimal temperature for germination (°C)
    k_T: float = 0.12             # Dormancy increase per °C above T_o

    # Initial dormancy
    psi_mean: float = 0.0         # Mean dormancy at dispersal
    psi_min: float = -1.0         # Minimum dormancy possible (floor for afterripening)
    psi_breadth: float = 1.0      # Spread between lowest and highest class
    n_seed_classes: int = 11      # Number of dormancy classes

    # Afterripening
    T_bar: float = 3.0            # Base temperature for afterripening (°C)
    psi_max: float = -5.0         # Moisture above which seeds are imbibed (MPa)
    psi_l: float = -350.0         # Lower moisture limit for afterripening (MPa)
    psi_u: float = -50.0          # Upper moisture limit for afterripening (MPa)
    d_sat: float = 40.0           # Days at reference conditions to lose psi_scale dormancy
    psi_scale: float = 1.0        # Dormancy lost over d_sat reference days

    # Hourly diagnostics
    store_psi: bool = False
    store_htu: bool = False


@dataclass(frozen=True)
class DispersalSection:
    """Thermal-time seed dispersal parameters.

    Degree-hours above T_b accumulate from flowering; seeds disperse at
    the first hour the total reaches `threshold`.
    """
    threshold: float = 8448.0     # Degree-hours from flowering to dispersal
    T_b: float = 3.0              # Base temperature (°C)
    store_progress: bool = False


@dataclass(frozen=True)
class ModelConfig:
    """Complete model configuration.

    Load from YAML via `load_config()`. Sections map 1:1 to YAML top-level keys.
    """
    germination: GerminationSection = field(default_factory=GerminationSection)
    dispersal: DispersalSection = field(default_factory=DispersalSection)


# ═══════════════════════════════════════════════════════════════════════
# YAML LOADING & MERGING
# ═══════════════════════════════════════════════════════════════════════

_SECTION_MAP = {
    'germination': GerminationSection,
    'dispersal': DispersalSection,
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Modifies base in place.

    - Dict values are merged recursively
    - Non-dict values are replaced
    - Keys in override but not base are added

    Returns:
        The merged base dictionary.
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _dict_to_section(section_cls, data: Dict) -> Any:
    """Convert a dict to a section dataclass, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(section_cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return section_cls(**filtered)


def _yaml_to_config(data: Dict) -> ModelConfig:
    sections = {}
    for key, cls in _SECTION_MAP.items():
        if key in data and isinstance(data[key], dict):
            sections[key] = _dict_to_section(cls, data[key])
        else:
            sections[key] = cls()
    return ModelConfig(**sections)


def config_to_dict(config: ModelConfig) -> Dict[str, Dict[str, Any]]:
    """Plain-dict view of a config, suitable for `yaml.safe_dump`."""
    return {
        key: dataclasses.asdict(getattr(config, key))
        for key in _SECTION_MAP
    }


# ═══════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════

def validate_germination(cfg: GerminationSection) -> None:
    """Validate germination parameters. Raises ValueError on failure.

    Degenerate but computable settings only warn.
    """
    if cfg.n_seed_classes < 1:
        raise ValueError(
            f"germination.n_seed_classes must be >= 1, got {cfg.n_seed_classes}"
        )
    if cfg.threshold < 0:
        raise ValueError(
            f"germination.threshold must be non-negative, got {cfg.threshold}"
        )
    if cfg.psi_breadth < 0:
        raise ValueError(
            f"germination.psi_breadth must be non-negative, got {cfg.psi_breadth}"
        )
    # arHTU interpolates across [psi_l, psi_u]; equal limits divide by zero
    if cfg.psi_l == cfg.psi_u:
        raise ValueError(
            f"germination.psi_l ({cfg.psi_l}) must differ from "
            f"psi_u ({cfg.psi_u})"
        )
    if cfg.d_sat <= 0:
        raise ValueError(
            f"germination.d_sat must be positive, got {cfg.d_sat}"
        )

    if cfg.T_o <= cfg.T_bg:
        warnings.warn(
            f"germination.T_o ({cfg.T_o}) <= T_bg ({cfg.T_bg}); "
            f"supra-optimal hours will never add heat units.",
            UserWarning,
            stacklevel=2,
        )
    lowest_psi = cfg.psi_mean - cfg.psi_breadth / 2.0
    if lowest_psi < cfg.psi_min:
        warnings.warn(
            f"germination.psi_min ({cfg.psi_min}) is above the lowest initial "
            f"dormancy class ({lowest_psi}); classes start below the floor.",
            UserWarning,
            stacklevel=2,
        )


def validate_dispersal(cfg: DispersalSection) -> None:
    """Validate dispersal parameters. Raises ValueError on failure."""
    if cfg.threshold < 0:
        raise ValueError(
            f"dispersal.threshold must be non-negative, got {cfg.threshold}"
        )


def validate_config(config: ModelConfig) -> None:
    """Validate every section of a ModelConfig."""
    validate_germination(config.germination)
    validate_dispersal(config.dispersal)


def load_config(
    base_path: Union[str, Path],
    scenario_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict] = None,
) -> ModelConfig:
    """Load and merge hierarchical YAML configuration.

    Merge order: base → scenario → overrides.
    Each layer overrides only the fields it specifies.

    Args:
        base_path: Path to base configuration YAML.
        scenario_path: Optional scenario override YAML (skipped if missing).
        overrides: Optional dict of parameter overrides.

    Returns:
        Validated ModelConfig.

    Raises:
        FileNotFoundError: If base_path doesn't exist.
        ValueError: If validation fails.
    """
    base_path = Path(base_path)
    if not base_path.exists():
        raise FileNotFoundError(f"Config file not found: {base_path}")

    with open(base_path) as f:
        config_dict = yaml.safe_load(f) or {}

    if scenario_path is not None:
        scenario_path = Path(scenario_path)
        if scenario_path.exists():
            with open(scenario_path) as f:
                scenario = yaml.safe_load(f) or {}
            deep_merge(config_dict, scenario)

    if overrides is not None:
        deep_merge(config_dict, overrides)

    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config


def default_config() -> ModelConfig:
    """Return a ModelConfig with all default values."""
    config = ModelConfig()
    validate_config(config)
    return config
