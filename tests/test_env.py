import os
import re
from pathlib import Path
from unittest import mock

import pytest

from toba.config import ProjectConfig
from toba.env import (
    EMBEDDED_TEMPLATE_SOURCE,
    EnvInitialization,
    global_env_path,
    load_env_config,
    load_env_file,
    resolve_env_config,
    resolve_global_env_initialization,
    write_global_env,
)

TEMPLATE = "TOBA_PHP_VERSION=\nTOBA_STARTER_REPO=\nTOBA_SSH_TARGET=\nTOBA_REMOTE_WORDPRESS_ROOT=\n"


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


def _make_source_root(directory: Path) -> None:
    (directory / "toba").mkdir(parents=True, exist_ok=True)
    (directory / "pyproject.toml").write_text('[project]\nname = "toba"\n')
    (directory / "toba" / "cli.py").write_text('"""cli"""\n')


def _write_global(content: str) -> str:
    path = global_env_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    Path(path).write_text(content)
    return path


def test_global_env_path_uses_config_home(config_home):
    assert global_env_path() == str(config_home / "toba" / ".env")


def test_global_env_path_rejects_relative_config_home(monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", "relative/dir")
    with pytest.raises(OSError, match="relative"):
        global_env_path()


def test_load_env_config(config_home):
    _write_global(
        "TOBA_PHP_VERSION=8.4\n"
        "TOBA_DOMAIN=demo.lndo.site\n"
        "TOBA_STARTER_REPO=git@example.com:company/starter.git\n"
        "TOBA_SSH_TARGET=user@192.168.0.1 -p 22\n"
        "TOBA_REMOTE_WORDPRESS_ROOT=www/example.com\n"
    )

    config = load_env_config()

    assert config.name == ""
    assert config.php_version == "8.4"
    assert config.domain == ""
    assert config.starter_repo == "git@example.com:company/starter.git"
    assert config.ssh_target == "user@192.168.0.1 -p 22"
    assert config.remote_wordpress_root == "www/example.com"


def test_resolve_env_config_without_file_returns_empty(config_home):
    config, path = resolve_env_config()
    assert config == ProjectConfig()
    assert path == ""


def test_resolve_env_config_reports_path(config_home):
    written = _write_global("TOBA_DATABASE=custom\n")
    config, path = resolve_env_config()
    assert path == written
    assert config.database == "custom"


def test_load_env_file_parses_exports_quotes_and_comments(tmp_path):
    env_file = tmp_path / "sample.env"
    env_file.write_text(
        "# comment\n"
        "\n"
        'export TOBA_PHP_VERSION="8.3"\n'
        "TOBA_SSH_TARGET = 'user@host -p 22'\n"
        "KEY=a=b\r\n"
    )
    assert load_env_file(str(env_file)) == {
        "TOBA_PHP_VERSION": "8.3",
        "TOBA_SSH_TARGET": "user@host -p 22",
        "KEY": "a=b",
    }


def test_load_env_file_missing_returns_empty(tmp_path):
    assert load_env_file(str(tmp_path / "missing.env")) == {}


def test_load_env_file_rejects_invalid_entry(tmp_path):
    env_file = tmp_path / "broken.env"
    env_file.write_text("A=1\nBROKEN\n")
    with pytest.raises(ValueError, match=re.escape(f"{env_file}:2: invalid env entry")):
        load_env_file(str(env_file))


def test_resolve_global_env_initialization_prefers_local_env_in_repo(tmp_path, config_home):
    repo = tmp_path / "repo"
    _make_source_root(repo)
    expected = b"TOBA_STARTER_REPO=git@example.com:company/starter.git\n"
    (repo / ".env").write_bytes(expected)
    (repo / ".env.example").write_bytes(b"TOBA_STARTER_REPO=\n")

    init = resolve_global_env_initialization(str(repo))

    assert init == EnvInitialization(
        content=expected,
        source_path=str(repo / ".env"),
        target_path=str(config_home / "toba" / ".env"),
        from_template=False,
    )


def test_resolve_global_env_initialization_falls_back_to_env_example(tmp_path, config_home):
    repo = tmp_path / "repo"
    _make_source_root(repo)
    (repo / ".env.example").write_bytes(b"TOBA_STARTER_REPO=\n")

    init = resolve_global_env_initialization(str(repo))

    assert init.source_path == str(repo / ".env.example")
    assert init.from_template is True
    assert init.content == b"TOBA_STARTER_REPO=\n"
    assert init.target_path == str(config_home / "toba" / ".env")


def test_resolve_global_env_initialization_uses_embedded_template_outside_repo(tmp_path, config_home):
    source = tmp_path / "elsewhere"
    source.mkdir()
    (source / ".env").write_text("IGNORED=1\n")

    init = resolve_global_env_initialization(str(source))

    assert init.source_path == EMBEDDED_TEMPLATE_SOURCE
    assert init.from_template is True
    assert init.content.decode() == TEMPLATE
    assert init.target_path == str(config_home / "toba" / ".env")


def test_write_global_env_writes_content(tmp_path):
    target = tmp_path / "config" / "toba" / ".env"
    write_global_env(str(target), b"TOBA_STARTER_REPO=git@example.com:company/starter.git\n")
    assert target.read_text() == "TOBA_STARTER_REPO=git@example.com:company/starter.git\n"


def test_write_global_env_reports_permission_error(tmp_path):
    target = tmp_path / "toba" / ".env"
    with mock.patch("pathlib.Path.write_bytes", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(PermissionError) as excinfo:
            write_global_env(str(target), b"X=1\n")
    assert str(excinfo.value) == f"cannot write global config at {target}: permission denied"