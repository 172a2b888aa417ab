"""YAML config loader with local/global lookup."""

import hashlib
import logging
from pathlib import Path

import yaml

from surfcheck.config.defaults import DEFAULT_SPOTS
from surfcheck.config.schema import SurfCheckConfig

logger = logging.getLogger(__name__)

# JSON is a YAML subset, so surf-check.json files load through the same path.
CONFIG_FILENAMES = ("surf-check.yaml", "surf-check.json")


def candidate_paths(cwd: Path | None = None, home: Path | None = None) -> list[Path]:
    """Config locations in priority order: local files first, then global."""
    cwd = cwd if cwd is not None else Path.cwd()
    home = home if home is not None else Path.home()
    local = [cwd / name for name in CONFIG_FILENAMES]
    global_ = [home / f".{name}" for name in CONFIG_FILENAMES]
    return local + global_


def find_config_path(cwd: Path | None = None, home: Path | None = None) -> Path | None:
    for path in candidate_paths(cwd, home):
        if path.is_file():
            return path
    return None


def load_config(path: str | Path | None = None) -> SurfCheckConfig:
    """Load and validate config.

    With no path, the first existing candidate file is used, falling back to
    built-in defaults. If no spots are specified, injects DEFAULT_SPOTS.
    """
    if path is None:
        path = find_config_path()
        if path is None:
            logger.info("No config file found, using defaults")
    raw: dict = {}
    if path is not None:
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        logger.debug("Loaded config from %s", path)

    if "spots" not in raw or not raw["spots"]:
        raw["spots"] = [s.model_dump() for s in DEFAULT_SPOTS]

    return SurfCheckConfig(**raw)


def config_hash(config: SurfCheckConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]
