"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from click.testing import CliRunner
from openapi_downgrader.cli import cli


def _write_source(tmp_path: Path) -> Path:
    document = {
        "openapi": "3.1.0",
        "info": {"title": "Accounts", "version": "1.0.0"},
        "paths": {
            "/accounts": {
                "post": {
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Account"}
                            }
                        }
                    },
                    "responses": {"201": {"description": "created"}},
                }
            }
        },
        "components": {
            "schemas": {
                "Account": {
                    "type": "object",
                    "properties": {"owner": {"type": ["string", "null"], "x-ui": "text"}},
                }
            },
            "securitySchemes": {"token": {"type": "http", "scheme": "bearer"}},
        },
    }
    path = tmp_path / "accounts.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_convert_command_prints_compact_json(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["convert", str(_write_source(tmp_path))])

    assert result.exit_code == 0
    document = json.loads(result.output)
    body = document["paths"]["/accounts"]["post"]["parameters"][0]
    assert body["name"] == "body"
    assert body["schema"] == {"type": "object", "properties": {"owner": {"type": "string"}}}
    assert document["securityDefinitions"]["token"] == {
        "type": "apiKey",
        "name": "Authorization",
        "in": "header",
    }


def test_convert_command_writes_yaml_file(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "swagger.yaml"

    result = runner.invoke(
        cli,
        [
            "convert",
            str(_write_source(tmp_path)),
            "--output",
            str(output_path),
            "--format",
            "yaml",
            "--no-deref",
            "--keep-extensions",
        ],
    )

    assert result.exit_code == 0
    assert result.output.strip() == str(output_path.resolve())
    document = yaml.safe_load(output_path.read_text(encoding="utf-8"))
    body = document["paths"]["/accounts"]["post"]["parameters"][0]
    assert body["schema"] == {"$ref": "#/definitions/Account"}
    assert document["definitions"]["Account"]["properties"]["owner"]["x-ui"] == "text"


def test_command_line_flags_override_settings_file(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "settings.yaml"
    config_path.write_text("conversion:\n  strict: false\n  deref: false\n", encoding="utf-8")

    result = runner.invoke(
        cli,
        ["convert", str(_write_source(tmp_path)), "--config", str(config_path), "--deref"],
    )

    assert result.exit_code == 0
    document = json.loads(result.output)
    owner = document["definitions"]["Account"]["properties"]["owner"]
    assert owner["x-nullable"] is True
    body = document["paths"]["/accounts"]["post"]["parameters"][0]
    assert "$ref" not in json.dumps(body)


def test_diagnostics_flag_adds_conversion_info(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "swagger.json"

    result = runner.invoke(
        cli,
        [
            "convert",
            str(_write_source(tmp_path)),
            "--output",
            str(output_path),
            "--diagnostics",
            "--pretty",
        ],
    )

    assert result.exit_code == 0
    assert "warning: Downgraded openapi version 3.1.x to 3.0.3" in result.output
    text = output_path.read_text(encoding="utf-8")
    assert text.startswith("{\n")
    document = json.loads(text)
    info = document["x-conversion-info"]
    assert info["originalOpenapi"] == "3.1.0"
    assert "Downgraded openapi version 3.1.x to 3.0.3 for conversion." in info["warnings"]


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "settings.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert result.output.strip() == str(output_path.resolve())
    assert "conversion:" in output_path.read_text(encoding="utf-8")
