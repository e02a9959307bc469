import yaml, pathlib
from .errors import ConfigError

DEFAULT_PATH = "sound_sync.yaml"

DEFAULTS = {
    "paths": {"source": "prenormalized", "output": "sounds"},
    "normalizer": {"backend": "ffmpeg-normalize"},
    "mime": {"detector": "file"},
}


def load(path=None) -> dict:
    """Read the YAML config. A missing default file means "no config";
    a missing file that was asked for explicitly is an error."""
    explicit = path is not None
    path = pathlib.Path(path) if explicit else pathlib.Path.cwd() / DEFAULT_PATH
    if not path.is_file():
        if explicit:
            raise ConfigError(f"config file not found: {path}")
        return {}
    try:
        with open(path, "r") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigError(f"config {path} must be a mapping, got {type(cfg).__name__}")
    return cfg


def section(cfg: dict, name: str) -> dict:
    # defaults first, file values win
    merged = dict(DEFAULTS.get(name, {}))
    value = cfg.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"config section '{name}' must be a mapping")
    merged.update(value)
    return merged


def paths(cfg: dict) -> dict:
    merged = section(cfg, "paths")
    for key in ("source", "output"):
        value = merged.get(key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"paths.{key} must be a non-empty string, got {value!r}")
    return merged
