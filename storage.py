from __future__ import annotations
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "STUDY_CALENDAR_DATA_DIR"

# Per-platform (env var, fallback under home, leaf) for the user data root
_PLATFORM_ROOTS = {
    "darwin": (None, ("Library", "Application Support"), "StudyCalendar"),
    "win32": ("APPDATA", ("AppData", "Roaming"), "StudyCalendar"),
}
_DEFAULT_ROOT = ("XDG_DATA_HOME", (".local", "share"), "study-calendar")


def get_data_dir() -> Path:
    """
    Directory holding saved profiles. STUDY_CALENDAR_DATA_DIR wins when
    set, otherwise the per-platform user data root is used.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        base = Path(override).expanduser()
    else:
        env_var, fallback, leaf = _PLATFORM_ROOTS.get(sys.platform, _DEFAULT_ROOT)
        root = os.environ.get(env_var) if env_var else None
        base = (Path(root) if root else Path.home().joinpath(*fallback)) / leaf
    base.mkdir(parents=True, exist_ok=True)
    return base


def data_path(filename: str | Path) -> Path:
    """Resolve a file path inside the data directory."""
    return get_data_dir() / Path(filename)


def _backup_file(path: Path, content: str) -> None:
    backup = path.with_suffix(path.suffix + ".bak")
    try:
        backup.write_text(content, encoding="utf-8")
    except OSError as e:
        # The reset still goes ahead without a backup
        logger.warning("Could not back up %s: %s", path, e)


def _reset(path: Path, raw_text: str, default: Any, why: str) -> Any:
    logger.warning("Resetting %s (%s); previous content kept in .bak", path.name, why)
    _backup_file(path, raw_text)
    save_json(path, default)
    return default


def load_json(path: Path | str, default: Any = None) -> Any:
    """
    Load JSON from path with safety:
    - If missing: return default
    - If empty or invalid: write .bak and reset to default
    """
    path = Path(path)
    if default is None:
        default = {}

    if not path.exists():
        return default

    raw_text = path.read_text(encoding="utf-8")
    text = raw_text.strip()
    if not text:
        return _reset(path, raw_text, default, "empty file")

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        return _reset(path, raw_text, default, f"invalid JSON: {e.msg}")


def save_json(path: Path | str, payload: Any) -> None:
    """
    Atomic JSON write: write to temp file then replace target.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp = path.with_suffix(path.suffix + ".tmp")
    temp.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    temp.replace(path)
