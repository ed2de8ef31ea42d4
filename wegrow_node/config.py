# wegrow_node/config.py
import copy
import logging
import os
from typing import Any, Dict, List, Optional

import yaml

log = logging.getLogger(__name__)

CONFIG_FILENAME = "wegrow_config.yaml"

# -------- Defaults --------
_DEFAULT: Dict[str, Any] = {
    "storage": {
        "path": "data/db.json",
        "keep_backups": 2,
        "lock_timeout_sec": 5.0,
    },
    "economy": {
        "listing_points": 10,
        # Completing a quest again credits its points again (badge stays single).
        "repeat_quest_points": True,
    },
    "logging": {"level": "INFO"},
    "server": {
        "host": "0.0.0.0",
        "port": 4000,
    },
    "cors": {"origins": ["*"]},
}

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        word = val.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"not a boolean: {val!r}")


# -------- ENV overrides --------
_ENV_MAP = {
    ("storage", "path"): ("WEGROW_DB_PATH", str),
    ("storage", "lock_timeout_sec"): ("WEGROW_LOCK_TIMEOUT_SEC", float),
    ("economy", "listing_points"): ("WEGROW_LISTING_POINTS", int),
    ("economy", "repeat_quest_points"): ("WEGROW_REPEAT_QUEST_POINTS", _as_bool),
    ("logging", "level"): ("WEGROW_LOG_LEVEL", str),
    ("server", "host"): ("WEGROW_HOST", str),
    ("server", "port"): ("PORT", int),
}


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for (section, key), (env_name, cast) in _ENV_MAP.items():
        val = os.getenv(env_name)
        if val is None:
            continue
        try:
            casted = cast(val)
        except ValueError:
            log.warning("ignoring %s=%r: expected %s", env_name, val, cast.__name__)
            continue
        cfg.setdefault(section, {})
        cfg[section][key] = casted
    return cfg


def load_config(repo_root: Optional[str] = None, path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads the YAML config from ``path``, $WEGROW_CONFIG, or
    repo_root/wegrow_config.yaml, in that order.
    Missing file means defaults; a file that does not parse is an error.
    ENV overrides are applied last.
    """
    path = path or os.getenv("WEGROW_CONFIG") or os.path.join(repo_root or os.getcwd(), CONFIG_FILENAME)
    cfg = copy.deepcopy(_DEFAULT)

    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: top level must be a mapping")
        cfg = _deep_merge(cfg, data)

    cfg = _apply_env_overrides(cfg)

    origins = cfg.get("cors", {}).get("origins")
    if isinstance(origins, str):
        cfg["cors"]["origins"] = [origins]

    return cfg


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(_DEFAULT)


# -------- Small helpers used by the app --------
def get_db_path(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("storage", {}).get("path", "data/db.json"))


def get_keep_backups(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("storage", {}).get("keep_backups", 2))


def get_lock_timeout(cfg: Dict[str, Any]) -> float:
    return float(cfg.get("storage", {}).get("lock_timeout_sec", 5.0))


def get_listing_points(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("economy", {}).get("listing_points", 10))


def get_repeat_quest_points(cfg: Dict[str, Any]) -> bool:
    return _as_bool(cfg.get("economy", {}).get("repeat_quest_points", True))


def get_log_level(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("logging", {}).get("level", "INFO")).upper()


def get_bind_host(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("server", {}).get("host", "0.0.0.0"))


def get_bind_port(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("server", {}).get("port", 4000))


def get_cors_origins(cfg: Dict[str, Any]) -> List[str]:
    return list(cfg.get("cors", {}).get("origins", []))


def configure_logging(cfg: Dict[str, Any]) -> None:
    logging.basicConfig(
        level=get_log_level(cfg),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
