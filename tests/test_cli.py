"""Tests for the command-line interface."""

import pandas as pd
from typer.testing import CliRunner

from phylofun.cli import app

runner = CliRunner()


def _write_catalogue(path):
    pd.DataFrame({
        "distance": [0.5, 0.5, 2.0, 2.0],
        "from": ["X", "X", "X", "Y"],
        "to": ["X", "Y", "Y", "X"],
        "probability": [0.1, 0.9, 0.4, 0.3],
    }).to_csv(path, index=False)


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "PHYLOFUN version" in result.stdout


def test_pairs(tmp_path):
    path = tmp_path / "pairs.tsv"
    path.write_text("A\tA\nA\tB\nC\tA\nA\tB\n")

    result = runner.invoke(app, ["pairs", str(path), "A"])
    assert result.exit_code == 0
    assert "B" in result.stdout
    assert "C" not in result.stdout


def test_pairs_bad_column(tmp_path):
    path = tmp_path / "pairs.tsv"
    path.write_text("A\tB\n")

    result = runner.invoke(app, ["pairs", str(path), "A", "--second-col", "5"])
    assert result.exit_code == 1


def test_cpt_writes_one_csv_per_branch_length(tmp_path):
    catalogue_path = tmp_path / "catalogue.csv"
    _write_catalogue(catalogue_path)
    out = tmp_path / "out"

    result = runner.invoke(app, [
        "cpt", str(catalogue_path),
        "-a", "X", "-a", "Y",
        "-b", "0.3", "-b", "1.5", "-b", "0.3",
        "--output-dir", str(out),
    ])
    assert result.exit_code == 0, result.stdout
    assert sorted(p.name for p in out.iterdir()) == ["cpt_0.3.csv", "cpt_1.5.csv"]

    table = pd.read_csv(out / "cpt_0.3.csv", index_col=0)
    assert list(table.columns) == ["X", "Y"]
    assert table.loc["X", "Y"] == 0.9
    assert table.loc["Y", "X"] == 0.1


def test_cpt_branch_length_beyond_catalogue(tmp_path):
    catalogue_path = tmp_path / "catalogue.csv"
    _write_catalogue(catalogue_path)

    result = runner.invoke(app, ["cpt", str(catalogue_path), "-a", "X", "-b", "3.0"])
    assert result.exit_code == 1


def test_pairs_with_empty_partner_cell(tmp_path):
    path = tmp_path / "pairs.tsv"
    path.write_text("A\tB\nA\t\n")

    result = runner.invoke(app, ["pairs", str(path), "A"])
    assert result.exit_code == 0, result.stdout
    assert "B" in result.stdout


def test_cpt_catalogue_missing_columns(tmp_path):
    catalogue_path = tmp_path / "catalogue.csv"
    pd.DataFrame({"distance": [0.5], "from": ["X"]}).to_csv(catalogue_path, index=False)

    result = runner.invoke(app, ["cpt", str(catalogue_path), "-a", "X", "-b", "0.3"])
    assert result.exit_code == 1
    assert "Missing catalogue columns" in result.stdout
    assert not isinstance(result.exception, ValueError)
