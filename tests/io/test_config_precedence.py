from __future__ import annotations

from pathlib import Path

import pytest

from addenda.core.constants import DEFAULT_SITE_URL, IMPORT_HOOK_PRIORITY
from addenda.io.config import Settings

_ENV_KEYS = [
    "ADDENDA_SITE_URL",
    "ADDENDA_IMPORT_HOOK_PRIORITY",
    "ADDENDA_STRICT_SCHEMA",
    "ADDENDA_PUBLISHED_FORMAT",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "addenda.toml",
        """
        [addenda]
        site_url = "https://toml.example"
        import_hook_priority = 7
        published_format = "iso"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ADDENDA_SITE_URL", "https://env.example/")
    monkeypatch.setenv("ADDENDA_IMPORT_HOOK_PRIORITY", "3")

    s = Settings.load()

    assert s.site_url == "https://env.example/"
    assert s.import_hook_priority == 3  # env override
    assert s.published_format == "iso"  # from TOML


def test_settings_from_toml_when_no_env(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "addenda.toml",
        """
        site_url = "https://toml.example"
        strict_schema = false
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    s = Settings.load()

    # trailing slash is added so identifiers join cleanly
    assert s.site_url == "https://toml.example/"
    assert s.strict_schema is False


def test_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "host"

        [tool.addenda]
        import_hook_priority = 10
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    assert Settings.load().import_hook_priority == 10


def test_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = Settings.load()

    assert s.site_url == DEFAULT_SITE_URL
    assert s.import_hook_priority == IMPORT_HOOK_PRIORITY
    assert s.strict_schema is True
    assert s.published_format == "rfc2822"


def test_invalid_values_keep_previous_layer(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "addenda.toml", 'import_hook_priority = 9\npublished_format = "iso"\n')
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ADDENDA_IMPORT_HOOK_PRIORITY", "soon")
    monkeypatch.setenv("ADDENDA_PUBLISHED_FORMAT", "unix")

    s = Settings.load()

    assert s.import_hook_priority == 9
    assert s.published_format == "iso"


def test_env_strict_schema_parsing(monkeypatch) -> None:
    monkeypatch.setenv("ADDENDA_STRICT_SCHEMA", "off")
    assert Settings.from_env().strict_schema is False
    monkeypatch.setenv("ADDENDA_STRICT_SCHEMA", "YES")
    assert Settings.from_env().strict_schema is True


def test_unreadable_toml_falls_back_to_defaults(tmp_path: Path) -> None:
    p = _write(tmp_path, "broken.toml", "site_url = [unterminated")
    assert Settings.from_toml(p) == Settings()
