"""core/tuning.py — Data-driven gameplay constants.

Every number the simulation uses (speeds, flashlight geometry, suspicion
rates, mini-game windows) lives in ``data/tuning.toml``.  Systems read a
value with a hard-coded fallback, so a missing file or key never breaks a
run::

    from core.tuning import get as _tun
    gain = _tun("suspicion", "gain", 1.5)

Hot-reload: ``reload()`` re-reads the file.  In-game, press F5.
"""

from __future__ import annotations
import tomllib
from pathlib import Path


_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    ``None`` means ``data/tuning.toml`` next to the ``core/`` package.
    """
    global _data, _path

    if path is None:
        path = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"
    else:
        path = Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found, using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk."""
    load(_path)


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* may be dotted to reach nested tables (``"guard.scan"``).

    >>> get("player", "speed", 4.0)
    4.0
    """
    node = _lookup(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def section(section_path: str) -> dict:
    """Return a shallow copy of a whole section, or an empty dict."""
    node = _lookup(section_path)
    return dict(node) if isinstance(node, dict) else {}


def _lookup(section_path: str):
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
