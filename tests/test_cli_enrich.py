# tests/test_cli_enrich.py
"""
Tests for the enrich and components commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import yaml
from typer.testing import CliRunner

from metadata_enrichment.cli.cli import app
from tests.conftest import FakeConnection, write_apex_class, write_lwc_bundle

runner = CliRunner()

CONNECTION_ENV = {"SF_INSTANCE_URL": "https://org.example.com", "SF_ACCESS_TOKEN": "token"}


def _fake_org(connection):
    return patch(
        "metadata_enrichment.cli.commands.enrich.OrgConnection",
        return_value=connection,
    )


class TestEnrichCommand:
    """Tests for metadata-enrichment enrich."""

    def test_enrich_shows_help(self):
        result = runner.invoke(app, ["enrich", "--help"])

        assert result.exit_code == 0
        assert "--metadata" in result.output
        assert "--json" in result.output

    def test_enrich_json_output(self, project_root):
        component = write_lwc_bundle(project_root, "hello")
        write_apex_class(project_root, "Svc")
        connection = FakeConnection()

        with _fake_org(connection):
            result = runner.invoke(app, ["enrich", str(project_root), "--json"], env=CONNECTION_ENV)

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["total"] == 2
        assert data["success"]["count"] == 1
        assert data["skipped"]["components"][0]["component"] == "Svc"
        assert "<ai>" in Path(component.xml).read_text(encoding="utf-8")

    def test_enrich_table_output(self, project_root):
        write_lwc_bundle(project_root, "hello")

        with _fake_org(FakeConnection()):
            result = runner.invoke(app, ["enrich", str(project_root)], env=CONNECTION_ENV)

        assert result.exit_code == 0, result.output
        assert "hello" in result.output
        assert "Total: 1" in result.output

    def test_enrich_metadata_filter(self, project_root):
        write_lwc_bundle(project_root, "a")
        write_lwc_bundle(project_root, "b")
        connection = FakeConnection()

        with _fake_org(connection):
            result = runner.invoke(
                app,
                ["enrich", str(project_root), "-m", "LightningComponentBundle:b", "--json"],
                env=CONNECTION_ENV,
            )

        assert result.exit_code == 0, result.output
        assert connection.called_names == ["b"]

    def test_enrich_exits_1_on_failure(self, project_root):
        write_lwc_bundle(project_root, "hello")
        connection = FakeConnection(failures={"hello": RuntimeError("boom")})

        with _fake_org(connection):
            result = runner.invoke(app, ["enrich", str(project_root), "--json"], env=CONNECTION_ENV)

        assert result.exit_code == 1
        assert json.loads(result.stdout)["fail"]["components"][0]["message"] == "boom"

    def test_enrich_uses_config_file(self, project_root, tmp_path):
        write_lwc_bundle(project_root, "hello")
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            yaml.safe_dump(
                {
                    "connection": {"instance_url": "https://org.example.com", "access_token": "t"},
                    "enrichment": {"max_tokens": 77},
                }
            ),
            encoding="utf-8",
        )
        connection = FakeConnection()

        with _fake_org(connection):
            result = runner.invoke(
                app,
                ["enrich", str(project_root), "--config", str(config_path), "--json"],
                env={"SF_INSTANCE_URL": "", "SF_ACCESS_TOKEN": ""},
            )

        assert result.exit_code == 0, result.output
        assert connection.calls[0]["body"]["maxTokens"] == 77

    def test_enrich_missing_connection_settings(self, project_root):
        result = runner.invoke(
            app,
            ["enrich", str(project_root)],
            env={"SF_INSTANCE_URL": "", "SF_ACCESS_TOKEN": ""},
        )

        assert result.exit_code == 2
        assert "instance_url" in result.output

    def test_enrich_invalid_metadata_option(self, project_root):
        result = runner.invoke(app, ["enrich", str(project_root), "-m", ":x"], env=CONNECTION_ENV)

        assert result.exit_code == 2
        assert "missing a type" in result.output

    def test_enrich_missing_project(self, tmp_path):
        result = runner.invoke(app, ["enrich", str(tmp_path / "nope")], env=CONNECTION_ENV)

        assert result.exit_code == 2
        assert "not found" in result.output


class TestComponentsCommand:
    """Tests for metadata-enrichment components."""

    def test_lists_components(self, project_root):
        write_lwc_bundle(project_root, "hello")
        write_apex_class(project_root, "Svc")

        result = runner.invoke(app, ["components", str(project_root)])

        assert result.exit_code == 0, result.output
        assert "hello" in result.output
        assert "Svc" in result.output
        assert "yes" in result.output
        assert "no" in result.output

    def test_empty_project(self, tmp_path):
        result = runner.invoke(app, ["components", str(tmp_path)])

        assert result.exit_code == 0
        assert "No components found" in result.output
