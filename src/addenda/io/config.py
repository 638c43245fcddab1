"""
Configuration for the addenda.io layer.

Defines Settings, a frozen dataclass carrying runtime configuration for export,
import and frame validation. Defaults are sourced from addenda.core.constants.

Source of truth
- addenda.core.constants.DEFAULT_SITE_URL, IMPORT_HOOK_PRIORITY

Import DAG discipline
- Depends only on stdlib and addenda.core.
- addenda.core never imports this module; callers pass settings values in explicitly.

Notes
- Precedence: environment (ADDENDA_*) > TOML > defaults.
- Invalid values are ignored; the previous layer's value is kept.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from addenda.core.constants import DEFAULT_SITE_URL, IMPORT_HOOK_PRIORITY
from addenda.core.timestamps import PublishedFormat

__all__ = [
    "Settings",
]

logger = logging.getLogger(__name__)

_PUBLISHED_FORMATS = ("rfc2822", "iso")


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for addenda.io.

    Attributes:
        site_url (str): Root under which universal identifiers are minted; ends with "/".
        import_hook_priority (int): Priority of the importer in the "import" hook chain.
        strict_schema (bool): Reject frames carrying columns outside their descriptor.
        published_format (Literal["rfc2822","iso"]): Rendering of exported timestamps.

    Examples:
        >>> from addenda.io import Settings
        >>> Settings(site_url="https://example.org/")  # doctest: +ELLIPSIS
        Settings(site_url='https://example.org/', ...)
    """

    site_url: str = DEFAULT_SITE_URL
    import_hook_priority: int = IMPORT_HOOK_PRIORITY
    strict_schema: bool = True
    published_format: PublishedFormat = "rfc2822"

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: Settings, cfg: dict[str, Any] | None) -> Settings:
        """Apply a loose config mapping onto Settings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        def _bool(v: Any) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, (int, float)):
                return bool(v)
            if isinstance(v, str):
                return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
            return False

        # site_url (always slash-terminated so uuids join cleanly)
        if "site_url" in cfg and isinstance(cfg["site_url"], str) and cfg["site_url"].strip():
            url = cfg["site_url"].strip()
            if not url.endswith("/"):
                url += "/"
            s = replace(s, site_url=url)

        # import_hook_priority
        if "import_hook_priority" in cfg:
            try:
                s = replace(s, import_hook_priority=int(cfg["import_hook_priority"]))
            except (TypeError, ValueError):
                logger.warning("ignoring import_hook_priority=%r", cfg["import_hook_priority"])

        # strict_schema
        if "strict_schema" in cfg:
            s = replace(s, strict_schema=_bool(cfg["strict_schema"]))

        # published_format
        if "published_format" in cfg and isinstance(cfg["published_format"], str):
            fmt = cfg["published_format"].strip().lower()
            if fmt in _PUBLISHED_FORMATS:
                s = replace(s, published_format=fmt)  # type: ignore[arg-type]
            else:
                logger.warning("ignoring published_format=%r", cfg["published_format"])

        return s

    @classmethod
    def from_env(cls, base: Settings | None = None, prefix: str = "ADDENDA_") -> Settings:
        """
        Build Settings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - ADDENDA_SITE_URL
            - ADDENDA_IMPORT_HOOK_PRIORITY
            - ADDENDA_STRICT_SCHEMA (1/0/true/false/yes/no/on/off)
            - ADDENDA_PUBLISHED_FORMAT ("rfc2822" | "iso")
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("site_url", "import_hook_priority", "strict_schema", "published_format"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Build Settings from a TOML file.

        Search order when `path` is None:
            1) ./addenda.toml (with either a top-level [addenda] table or direct keys)
            2) ./pyproject.toml under [tool.addenda]

        Returns defaults if no file is present or none of them parse.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("could not read %s: %s", p, exc)
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "addenda.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("addenda", {}) if isinstance(tool, dict) else None
            else:
                if "addenda" in data and isinstance(data["addenda"], dict):
                    cfg = data["addenda"]
                else:
                    cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Load Settings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (addenda.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
