"""Unit tests for the click command group (memory backend)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vargraph.catalog import catalog_to_dict
from vargraph.cli import cli
from vargraph.models.catalog import Catalog, DependencyEdge, Variable


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    for key in ("STORE_BACKEND", "CATALOG_PATHS", "LOG_LEVEL"):
        monkeypatch.delenv(f"VARGRAPH_{key}", raising=False)
    return CliRunner()


class TestCatalogsCommand:
    def test_lists_builtin_catalogs(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["catalogs"])
        assert result.exit_code == 0, result.output
        assert "RSSMIF16D\t8 variables\t15 edges" in result.stdout
        assert "ATL08\t12 variables\t24 edges" in result.stdout

    def test_broken_catalog_file_fails(self, runner: CliRunner, tmp_path: Path) -> None:
        broken = Catalog(id="C-x", name="X", variables=(Variable("V-x", "x"),), edges=(DependencyEdge(0, 4),))
        path = tmp_path / "broken.json"
        path.write_text(json.dumps(catalog_to_dict(broken)), encoding="utf-8")
        result = runner.invoke(cli, ["catalogs"], env={"VARGRAPH_CATALOG_PATHS": str(path)})
        assert result.exit_code == 1
        assert "undefined variable index 4" in result.output


class TestAugmentCommand:
    def test_prints_augmented_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["augment", "V1238395077-EEDTEST"])
        assert result.exit_code == 0, result.output
        [collection] = json.loads(result.stdout)
        assert collection["collection_id"] == "C1238392622-EEDTEST"
        assert [v["name"] for v in collection["variables"]][1:] == ["latitude", "longitude", "time"]

    def test_explicit_collection(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["augment", "--collection", "C-custom", "V1238395077-EEDTEST"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)[0]["collection_id"] == "C-custom"

    def test_unknown_variable_needs_collection(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["augment", "V-unknown"])
        assert result.exit_code == 2
        assert "--collection" in result.output

    def test_requires_a_variable(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["augment"])
        assert result.exit_code == 2


class TestPopulateCommand:
    def test_populate_memory_store(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["populate"])
        assert result.exit_code == 0, result.output
        assert "Populated 2 catalog(s)." in result.stdout


class TestConfigErrors:
    def test_invalid_backend_reported(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["catalogs"], env={"VARGRAPH_STORE_BACKEND": "sqlite"})
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
