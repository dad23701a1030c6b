# features/config.py
import copy
from pathlib import Path
from typing import Any, Dict, Union

import yaml

"""
Configuration for feature extraction and the batch driver.

Configs are plain dicts (as loaded from YAML). `load_config` overlays a YAML
file onto DEFAULT_CONFIG so a config only needs the keys it changes.
"""

DEFAULT_CONFIG: Dict[str, Any] = {
    "work_root": ".",
    "data": {
        "class_table": "data/plankton_types.txt",
        "training_list": "data/training_files.txt",
        "testing_list": "data/testing_files.txt",
        "test_class": "test_class",
        "test_superclass": "test_superclass",
    },
    "features": {
        "size": {},
        "n_pixels": {},
        "whiteness": {},
        "centroid": {},
        "arspread": {
            "angle_step": 5,
            "angle_max": 180,
            "integer_division": True,
        },
        "n_constituents": {
            "min_region_pixels": 100,
            "kernel_size": 3,
            "connectivity": 8,
        },
    },
    "logging": {"level": "INFO"},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def load_config(path: Union[str, Path, None] = None, overrides: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Load a YAML config over DEFAULT_CONFIG.

    Args:
        path: YAML file, or None to start from the defaults.
        overrides: extra dict merged last (e.g. from CLI flags).

    Raises:
        ValueError: if the config names a feature that does not exist.
    """
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if path is not None:
        with open(path, "r") as f:
            cfg = _merge(cfg, yaml.safe_load(f) or {})
    if overrides:
        cfg = _merge(cfg, overrides)
    unknown = set(cfg.get("features", {})) - set(DEFAULT_CONFIG["features"])
    if unknown:
        raise ValueError(f"Unknown feature(s) in config: {sorted(unknown)}")
    return cfg


def feature_config(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    if name not in DEFAULT_CONFIG["features"]:
        raise KeyError(f"Unknown feature: {name}")
    defaults = DEFAULT_CONFIG["features"][name]
    return _merge(defaults, (config or {}).get("features", {}).get(name, {}))
