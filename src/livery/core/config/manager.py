"""
Livery configuration management (YAML layers plus LIVERY_* env overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import jsonschema
import yaml

from livery.core.exceptions import ConfigurationError
from livery.core.utils.merge import deep_merge
from livery.core.utils.profiling import span
from livery.data import bundled_config_dir, load_schema

from .cache import register_cache_clearer

logger = logging.getLogger(__name__)

ENV_PREFIX = "LIVERY_"

register_cache_clearer("schema", load_schema.cache_clear)

# Env vars under the prefix that are not config overrides.
_RESERVED_ENV_KEYS = {"PROJECT_ROOT", "paths__project_config_dir"}


class ConfigManager:
    """Load, merge, and validate Livery configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: LIVERY_<section>__<key>
    2. Project-local config: <project>/.livery/config.local/*.yaml (uncommitted)
    3. Project config: <project>/.livery/config/*.yaml (alphabetical order)
    4. Bundled defaults: livery.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = repo_root or self._find_repo_root()

        from livery.core.utils.paths import get_project_config_dir

        project_root_dir = get_project_config_dir(self.repo_root, create=False)

        self.core_config_dir = bundled_config_dir()
        self.project_config_dir = project_root_dir / "config"
        self.project_local_config_dir = project_root_dir / "config.local"

    def _find_repo_root(self) -> Path:
        from livery.core.utils.paths import resolve_project_root

        return resolve_project_root()

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        from livery.core.utils.io import read_yaml

        # Invalid YAML is an error, never a skipped layer.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Invalid YAML in {path}: {exc}", context={"file": str(path)}
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}",
                context={"file": str(path)},
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        from livery.core.utils.io import iter_yaml_files

        for path in iter_yaml_files(directory):
            logger.debug("Merging config layer %s", path)
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ========== Environment overrides ==========

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s):
            return float(s)
        if (s.startswith("[") and s.endswith("]")) or (s.startswith("{") and s.endswith("}")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[str], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if raw in _RESERVED_ENV_KEYS:
                continue
            segs = raw.split("__")
            if len(segs) < 2 or any(not seg for seg in segs):
                if strict:
                    raise ConfigurationError(
                        f"Malformed {ENV_PREFIX}* key: '{key}' (expected {ENV_PREFIX}<section>__<key>)",
                        context={"env": key},
                    )
                continue
            yield segs, self._coerce_type(os.environ[key]), raw

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            # Case-insensitive match so LIVERY_overlay__sourcedir hits "sourceDir".
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(part.lower(), part)
            nxt = cur.get(key)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[key] = nxt
            cur = nxt
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(path[-1].lower(), path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool = False) -> None:
        for path, typed_value, raw in self._iter_env_overrides(strict=strict):
            logger.debug("Applying env override %s%s", ENV_PREFIX, raw)
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = load_schema()
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigurationError(
                f"Invalid configuration at {location}: {exc.message}",
                context={"path": location},
            ) from exc

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all layers (UNCACHED)."""
        with span("config.load_config.total", validate=validate):
            cfg: Dict[str, Any] = {}
            with span("config.load_config.core"):
                cfg = self._load_directory(self.core_config_dir, cfg)
            with span("config.load_config.project"):
                cfg = self._load_directory(self.project_config_dir, cfg)
            with span("config.load_config.project_local"):
                cfg = self._load_directory(self.project_local_config_dir, cfg)
            with span("config.load_config.env"):
                self.apply_env_overrides(cfg, strict=False)
            if validate:
                self.validate_schema(cfg)
            return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration using the centralized cache.

        The returned dict is shared; treat it as immutable.
        """
        from .cache import get_cached_config

        cfg = get_cached_config(repo_root=self.repo_root)
        if validate:
            # Fail closed on malformed LIVERY_* keys even for cached configs.
            _ = list(self._iter_env_overrides(strict=True))
            with span("config.load_config.validate_cached"):
                self.validate_schema(cfg)
        return cfg

    def get(self, dotted: str, default: Any = None) -> Any:
        """Return a nested value by dotted path (e.g. ``"overlay.sourceDir"``)."""
        cur: Any = self.load_config(validate=False)
        for part in dotted.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX"]
