"""
End-to-end command dispatch through main(), which owns the exit status.
"""

import os
import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest
import requests

from tfget.cli.cli import main
from tfget.version import __version__

INDEX_HTML = '<li><a href="/terraform/1.0.0/">terraform_1.0.0</a></li>'


@pytest.fixture
def config_file(tmp_path: Path) -> str:
    path = tmp_path / "tfget.yaml"
    path.write_text(textwrap.dedent(f"""\
        options:
          releases_url: https://releases.example.test/terraform/
          cache_dir: {tmp_path / "versions"}
          system_install_path: {tmp_path / "system" / "terraform"}
          platform: linux_amd64
    """))
    return str(path)


def test_version_flag(capsys):
    assert main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


@pytest.mark.parametrize("argv", [[], ["help"], ["install", "1.0.0"]])
def test_unknown_or_missing_command(argv, capsys):
    assert main(argv) == 2
    assert "Help not implemented yet." in capsys.readouterr().err


@pytest.mark.parametrize("command", ["download", "switch", "use"])
def test_missing_selector(command, config_file, capsys):
    assert main([command, "--config", config_file]) == 1
    assert "No version given" in capsys.readouterr().err


def test_which_creates_cache_dir(config_file, tmp_path: Path):
    assert main(["which", "--config", config_file]) == 0
    assert (tmp_path / "versions").is_dir()


def test_switch_and_list(config_file, tmp_path: Path, release_server, make_zip, capsys):
    serve = release_server(INDEX_HTML, make_zip({"terraform": "BIN"}))
    with patch("requests.get", side_effect=serve):
        assert main(["use", "latest", "--config", config_file]) == 0

    link = tmp_path / "versions" / "terraform"
    assert os.readlink(str(link)) == str(tmp_path / "versions" / "terraform_1.0.0")

    capsys.readouterr()
    assert main(["list", "--config", config_file]) == 0
    assert "terraform_1.0.0" in capsys.readouterr().out


def test_conflict_exit_status(config_file, tmp_path: Path, capsys):
    system = tmp_path / "system" / "terraform"
    system.parent.mkdir()
    system.write_text("installed by the OS")

    with patch("tfget.core.scraper.requests.get") as get:
        assert main(["switch", "1.0.0", "--config", config_file]) == 1
    get.assert_not_called()
    assert "system-wide" in capsys.readouterr().err


def test_network_failure_exit_status(config_file, capsys):
    with patch("tfget.core.scraper.requests.get",
               side_effect=requests.ConnectionError("connection refused")):
        assert main(["list-remote", "--config", config_file]) == 1
    assert "connection refused" in capsys.readouterr().err


def test_not_found_exit_status(config_file, fake_response, capsys):
    with patch("tfget.core.scraper.requests.get",
               return_value=fake_response(text=INDEX_HTML)):
        assert main(["download", "0.0.1", "--config", config_file]) == 1
    assert "Version not found" in capsys.readouterr().err
