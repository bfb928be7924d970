"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

import httpx2
from schema_registry_sync.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["register", "--dry-run"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["download", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_configuration_file_returns_error_exit_code(tmp_path: Path, capsys) -> None:
    exit_code = main(["register", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "schema-registry.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert output_path.read_text(encoding="utf-8") == "existing"


def test_registry_connection_failure_returns_error_exit_code(
    tmp_path: Path, monkeypatch, capsys, registry_client
) -> None:
    config_path = tmp_path / "schema-registry.yaml"
    config_path.write_text(
        'registry:\n  url: "http://registry.example.com:8081"\n'
        'schemas:\n  directory: "schemas"\n  subjects: []\n',
        encoding="utf-8",
    )
    registry_client.failures["get_subjects"] = httpx2.ConnectError("connection refused")
    monkeypatch.setattr(
        "schema_registry_sync.cli.create_registry_client", lambda settings: registry_client
    )

    exit_code = main(["list-subjects", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Schema registry request failed: connection refused" in captured.err
    assert "Traceback" not in captured.err
