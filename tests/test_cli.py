from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from pdfinspect import __version__
from pdfinspect.cli import cli


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "tree" in result.output
    assert "objects" in result.output


def test_cli_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_tree_command(sample_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["tree", str(sample_pdf)])

    assert result.exit_code == 0, result.output
    assert "Trailer" in result.output
    assert "/Root" in result.output
    assert "/Catalog" in result.output


def test_tree_command_marks_recursive_references(sample_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["tree", str(sample_pdf), "--depth", "10"])

    assert result.exit_code == 0, result.output
    assert "(page tree)" in result.output
    assert "recursive" in result.output


def test_tree_command_for_single_object(sample_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["tree", str(sample_pdf), "--object", "1", "--depth", "1"])

    assert result.exit_code == 0, result.output
    assert "Trailer" not in result.output


def test_objects_command(sample_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["objects", str(sample_pdf)])

    assert result.exit_code == 0, result.output
    assert "Number" in result.output
    assert "dictionary" in result.output
    assert "indirect objects" in result.output


def test_encrypted_document_needs_password(encrypted_pdf: Path) -> None:
    runner = CliRunner()

    failed = runner.invoke(cli, ["objects", str(encrypted_pdf)])
    assert failed.exit_code == 1
    assert "Error" in failed.output

    opened = runner.invoke(cli, ["objects", str(encrypted_pdf), "--password", "secret"])
    assert opened.exit_code == 0, opened.output


def test_invalid_document(broken_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["tree", str(broken_pdf)])

    assert result.exit_code == 1
    assert "Error" in result.output
