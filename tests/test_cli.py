"""Tests for CLI module."""

from typer.testing import CliRunner

from bibfix import __version__
from bibfix.cli import app

runner = CliRunner()


class TestVersionOption:
    def test_version_option(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_short_option(self):
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestFixCommand:
    def test_output_then_input(self, library_file, fixed_library, tmp_path):
        output = tmp_path / "fixed.bib"
        result = runner.invoke(app, [str(output), str(library_file)])
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == fixed_library
        assert "with 2 entries." in result.output
        assert "Fixes applied" in result.output

    def test_default_file_names(self, library_file, fixed_library, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert (tmp_path / "library_fixed.bib").read_text(encoding="utf-8") == fixed_library

    def test_only_output_given(self, library_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["custom.bib"])
        assert result.exit_code == 0
        assert (tmp_path / "custom.bib").exists()
        assert not (tmp_path / "library_fixed.bib").exists()

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "out.bib"), str(tmp_path / "nope.bib")])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Input file" in result.output
        assert not (tmp_path / "out.bib").exists()

    def test_output_not_creatable(self, library_file, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "missing_dir" / "out.bib"), str(library_file)])
        assert result.exit_code == 1
        assert "Cannot create output file" in result.output

    def test_keep_annote_and_abstract(self, library_file, tmp_path):
        output = tmp_path / "out.bib"
        result = runner.invoke(app, [str(output), str(library_file), "--keep-annote", "--keep-abstract"])
        assert result.exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert "annote = {Read again" in text
        assert "abstract = {We study" in text

    def test_keep_all_urls(self, library_file, tmp_path):
        """With both switches every url survives."""
        output = tmp_path / "out.bib"
        result = runner.invoke(app, [str(output), str(library_file), "--keep-all-urls", "--keep-url-with-doi"])
        assert result.exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert "url = {http://ieeexplore.ieee.org/document/6862894/}" in text
        assert "url = {https://www.mendeley.com}" in text

    def test_url_exception_replaces_defaults(self, library_file, tmp_path):
        output = tmp_path / "out.bib"
        result = runner.invoke(app, [str(output), str(library_file), "--url-exception", "unpublished"])
        assert result.exit_code == 0
        assert "url =" not in output.read_text(encoding="utf-8")

    def test_issn_as_year(self, tmp_path):
        source = tmp_path / "in.bib"
        source.write_text("@article{a,\nissn = {to appear},\ntitle = {{T}}\n}\n", encoding="utf-8")
        output = tmp_path / "out.bib"
        result = runner.invoke(app, [str(output), str(source), "--issn-as-year"])
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == "@article{a,\nyear = {to appear},\ntitle = {T}\n}\n"

    def test_nothing_to_fix(self, tmp_path):
        source = tmp_path / "in.bib"
        source.write_text("@article{a,\ntitle = {T},\nyear = {2020}\n}\n", encoding="utf-8")
        result = runner.invoke(app, [str(tmp_path / "out.bib"), str(source)])
        assert result.exit_code == 0
        assert "No entries needed fixing" in result.output
