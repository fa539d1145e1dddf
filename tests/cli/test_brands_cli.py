from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from livery.cli._dispatcher import build_parser, discover_commands, discover_domains, main as cli_main


def test_domains_and_commands_are_discovered() -> None:
    assert {"brands", "frontier"} <= set(discover_domains())
    assert set(discover_commands("brands")) == {"entries", "list", "resolve", "watch"}
    assert {"route", "show"} <= set(discover_commands("frontier"))


def test_no_domain_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main([]) == 0
    assert "usage: livery" in capsys.readouterr().out


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--version"])
    assert exc.value.code == 0
    assert "livery 1.0.0" in capsys.readouterr().out


def test_brands_list_json(project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["brands", "list", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["brands"] == ["acme", "globex"]
    assert payload["sourceRoot"] == str(project_env / "src")


def test_brands_list_text_with_repo_root(site: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["brands", "list", "--repo-root", str(site)]) == 0
    out = capsys.readouterr().out
    assert "2 brand(s)" in out
    assert "  acme" in out


def test_brands_resolve_reports_overlay(project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["brands", "resolve", "/src/components/Button.tsx", "--brand", "acme", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["overlay"] == str(project_env / "src/components/brands/acme/Button.tsx")
    assert payload["overlayExists"] is True
    assert payload["knownBrand"] is True
    assert payload["isOverlay"] is False
    assert payload["base"] is None
    assert payload["styleBridge"] is None


def test_brands_resolve_style_bridge_from_relative_path(project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rel = "src/components/brands/acme/Title.module.css"
    assert cli_main(["brands", "resolve", rel, "--brand", "acme", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["isOverlay"] is True
    assert payload["base"] == str(project_env / "src/components/Title.module.css")
    assert payload["styleBridge"]["kind"] == "module"


def test_brands_resolve_warns_for_unknown_brand(project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["brands", "resolve", "src/App.tsx", "--brand", "nobody"]) == 0
    out = capsys.readouterr().out
    assert "Warning: brand 'nobody'" in out
    assert "overlay exists: False" in out


def test_brands_entries(project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["brands", "entries", "--json"]) == 0
    maps = json.loads(capsys.readouterr().out)
    assert maps["client"]["brand-globex"] == "/src/__brand__/globex/entry-client.ts"
    assert maps["server"]["entry-server-acme"] == "/src/entry-server.tsx?brand=acme"

    assert cli_main(["brands", "entries", "--target", "server"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("server:")
    assert "client:" not in out


def test_brands_watch_times_out(project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["brands", "watch", "--timeout", "0.3", "--json"]) == 0
    first = capsys.readouterr().out.splitlines()[0]
    assert json.loads(first) == {"event": "rescan", "brands": ["acme", "globex"]}


def test_livery_errors_become_exit_code_1(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("LIVERY_PROJECT_ROOT", str(tmp_path / "gone"))
    assert cli_main(["brands", "list"]) == 1
    assert "LIVERY_PROJECT_ROOT" in capsys.readouterr().err


def test_verbose_installs_stderr_handler(project_env: Path) -> None:
    assert cli_main(["-vv", "brands", "list", "--json"]) == 0
    assert logging.getLogger("livery").level == logging.DEBUG


def test_log_file_flag(project_env: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "livery.log"
    assert cli_main(["-v", "--log-file", str(log_file), "brands", "list"]) == 0
    assert log_file.exists()


def test_profile_summary_on_stderr(project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["--profile", "brands", "list"]) == 0
    err = capsys.readouterr().err
    assert "[livery][profile]" in err
    assert "overlay.scan" in err
