from pathlib import Path

import pytest
from typer.testing import CliRunner

from bibresolve.ui.cli import app


runner = CliRunner()


@pytest.fixture
def structured_file(tmp_path: Path, xyz_structured: str) -> Path:
    path = tmp_path / "refs.yml"
    path.write_text(xyz_structured, encoding="utf-8")
    return path


@pytest.fixture
def bibtex_file(tmp_path: Path) -> Path:
    path = tmp_path / "refs.bib"
    path.write_text(
        "@article{knuth84, title={Literate Programming}, author={Knuth, Donald}, year={1984}}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def unsorted_csl(tmp_path: Path, unsorted_style: str) -> Path:
    path = tmp_path / "unsorted.csl"
    path.write_text(unsorted_style, encoding="utf-8")
    return path


def test_keys_prints_citation_order(structured_file: Path, unsorted_csl: Path) -> None:
    result = runner.invoke(
        app, ["keys", str(structured_file), "--csl", str(unsorted_csl), "--cited", "z,x"]
    )

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "z x"


def test_keys_with_bundled_style_and_full_library(
    structured_file: Path, bibtex_file: Path
) -> None:
    result = runner.invoke(
        app,
        ["keys", str(structured_file), str(bibtex_file), "--style", "alphabetic", "--full"],
    )

    assert result.exit_code == 0, result.output
    assert set(result.output.split()) == {"x", "y", "z", "knuth84"}


def test_keys_reports_missing_entry(structured_file: Path, unsorted_csl: Path) -> None:
    result = runner.invoke(
        app, ["keys", str(structured_file), "--csl", str(unsorted_csl), "--cited", "missing"]
    )

    assert result.exit_code == 1
    assert "missing" in result.output


def test_keys_rejects_blank_cited_items(structured_file: Path, unsorted_csl: Path) -> None:
    result = runner.invoke(
        app, ["keys", str(structured_file), "--csl", str(unsorted_csl), "--cited", "x,,y"]
    )

    assert result.exit_code != 0
    assert "--cited" in result.output


def test_keys_rejects_undecodable_source(tmp_path: Path, unsorted_csl: Path) -> None:
    source = tmp_path / "broken.bib"
    source.write_bytes(b"\xff\xfe@misc{x, title={X}}")

    result = runner.invoke(app, ["keys", str(source), "--csl", str(unsorted_csl), "--cited", "x"])

    assert result.exit_code != 0
    assert "Not valid UTF-8" in result.output
    assert "Traceback" not in result.output


def test_keys_requires_a_style(structured_file: Path) -> None:
    result = runner.invoke(app, ["keys", str(structured_file), "--cited", "x"])

    assert result.exit_code != 0
    assert "--style" in result.output


def test_render_shows_bibliography_table(structured_file: Path, unsorted_csl: Path) -> None:
    result = runner.invoke(
        app, ["render", str(structured_file), "--csl", str(unsorted_csl), "--cited", "y"]
    )

    assert result.exit_code == 0, result.output
    assert "Bibliography" in result.output
    assert "Why" in result.output


def test_styles_lists_bundled_archive() -> None:
    result = runner.invoke(app, ["styles"])

    assert result.exit_code == 0, result.output
    assert "alphabetic" in result.output
    assert "numeric" in result.output


def test_styles_includes_configured_directories(tmp_path: Path, unsorted_style: str) -> None:
    style_dir = tmp_path / "styles"
    style_dir.mkdir()
    (style_dir / "house.csl").write_text(unsorted_style, encoding="utf-8")
    config = tmp_path / "bibresolve.yml"
    config.write_text("style_dirs:\n  - styles\n", encoding="utf-8")

    result = runner.invoke(app, ["styles", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert "house" in result.output


def test_export_yaml(bibtex_file: Path) -> None:
    result = runner.invoke(app, ["export", str(bibtex_file)])

    assert result.exit_code == 0, result.output
    assert "entries:" in result.output
    assert "knuth84:" in result.output
    assert "Literate Programming" in result.output


def test_export_bibtex_to_file(structured_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "merged.bib"

    result = runner.invoke(
        app, ["export", str(structured_file), "--to", "bibtex", "--output", str(output)]
    )

    assert result.exit_code == 0, result.output
    payload = output.read_text(encoding="utf-8")
    assert "@article{x," in payload
    assert "Zed" in payload


def test_export_rejects_misaligned_format_hints(bibtex_file: Path) -> None:
    result = runner.invoke(app, ["export", str(bibtex_file), "--format", "bib,yml"])

    assert result.exit_code != 0
    assert "format hints" in result.output


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip()
