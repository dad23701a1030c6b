# utils/paths.py
from pathlib import Path
from typing import Union


def resolve_under_root(p: Union[str, Path], root: Path) -> Path:
    p = Path(p)
    return p if p.is_absolute() else (Path(root) / p)


def resolve_under_root_cfg(cfg, p: Union[str, Path]) -> Path:
    """
    Resolve path under cfg["work_root"].
    Works whether p is absolute or relative.
    """
    work_root = Path(cfg.get("work_root", "."))
    return resolve_under_root(str(p), work_root)


def data_path(cfg, key: str) -> Path:
    """Resolve cfg["data"][key] under the work root."""
    try:
        rel = cfg["data"][key]
    except KeyError:
        raise KeyError(f"Missing data path in config: data.{key}") from None
    return resolve_under_root_cfg(cfg, rel)
