import copy
import datetime
import os

import yaml

from rubric import DEFAULT_RUBRIC


DEFAULT_CONFIG = {
    "scoring": {
        "as_of_year": None,
        "default_preset": "balanced",
        "default_cargo": None,
    },
    "rubric": {},
    "processing": {
        "batch_size": 20,
        "parallel_workers": 8,
        "batch_deviation_threshold": 0.2,
    },
    "output": {
        "top_n": 10,
        "runs_dir": "runs",
    },
    "logging": {
        "level": "INFO",
    },
}


class ConfigError(Exception):
    pass


def load_config(path):
    if not path or not os.path.exists(path):
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()
    data = _load_yaml(raw, path)
    return _merge_dicts(DEFAULT_CONFIG, data)


def merge_config(base, override):
    if not override:
        return base
    return _merge_dicts(base, override)


def resolve_rubric(config):
    overrides = (config or {}).get("rubric") or {}
    return _merge_dicts(DEFAULT_RUBRIC, overrides)


def as_of_year(config):
    value = ((config or {}).get("scoring") or {}).get("as_of_year")
    if value in (None, ""):
        return datetime.date.today().year
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"scoring.as_of_year must be a year, got {value!r}")


def _merge_dicts(base, override):
    result = {}
    for key, value in base.items():
        if isinstance(value, dict) and isinstance(override.get(key, {}), dict):
            result[key] = _merge_dicts(value, override.get(key, {}))
        else:
            result[key] = copy.deepcopy(override.get(key, value))
    for key, value in override.items():
        if key not in result:
            result[key] = copy.deepcopy(value)
    return result


def _load_yaml(raw, path):
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"could not parse {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data
