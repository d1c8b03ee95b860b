"""
Tests for the CLI.

Runs the typer app against a temporary database.
"""

import pytest
from typer.testing import CliRunner

from cli.main import app
from sociogram.encoding import PALETTE
from sociogram.parser import format_relationships, parse_relationships
from sociogram.storage import DataStore

from tests.fixtures import MALFORMED_TEXT, STAR, VALID_TEXT


runner = CliRunner()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "sociogram.db"


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "class.txt"
    path.write_text(VALID_TEXT, encoding="utf-8")
    return path


class TestLoadAndReset:
    """Tests for the load, export and reset commands."""

    def test_load_saves_data(self, db_path, data_file):
        """Test a valid file becomes the working dataset."""
        result = runner.invoke(app, ["load", str(data_file), "--db", str(db_path)])

        assert result.exit_code == 0
        assert "Loaded" in result.output
        assert list(DataStore(db_path).load()) == ["Hannah", "Nate", "Hunter"]

    def test_load_rejects_malformed(self, db_path, tmp_path):
        """Test a malformed file is rejected and nothing is saved."""
        bad = tmp_path / "bad.txt"
        bad.write_text(MALFORMED_TEXT, encoding="utf-8")

        result = runner.invoke(app, ["load", str(bad), "--db", str(db_path)])

        assert result.exit_code == 1
        assert "Invalid format" in result.output
        assert DataStore(db_path).load() is None

    def test_reset(self, db_path, data_file):
        """Test reset forgets saved data."""
        runner.invoke(app, ["load", str(data_file), "--db", str(db_path)])

        result = runner.invoke(app, ["reset", "--db", str(db_path)])

        assert result.exit_code == 0
        assert not DataStore(db_path).is_custom()

    def test_export_round_trip(self, db_path, data_file, tmp_path):
        """Test exported text loads back to the same data."""
        runner.invoke(app, ["load", str(data_file), "--db", str(db_path)])
        out = tmp_path / "exported.txt"

        result = runner.invoke(app, ["export", "--out", str(out), "--db", str(db_path)])

        assert result.exit_code == 0
        assert parse_relationships(out.read_text(encoding="utf-8")) == DataStore(db_path).load()

    def test_export_to_stdout(self, db_path, data_file):
        """Test export prints to stdout by default."""
        runner.invoke(app, ["load", str(data_file), "--db", str(db_path)])

        result = runner.invoke(app, ["export", "--db", str(db_path)])

        assert result.exit_code == 0
        assert "Nate: Cooper B, Tamia, Charlotte" in result.output

    def test_reset_without_custom_data(self, db_path):
        """Test reset on built-in data is a no-op."""
        result = runner.invoke(app, ["reset", "--db", str(db_path)])

        assert result.exit_code == 0
        assert "Already using" in result.output


class TestInspection:
    """Tests for show, communities and info."""

    def test_show_builtin(self, db_path):
        """Test the summary for the built-in roster."""
        result = runner.invoke(app, ["show", "--db", str(db_path)])

        assert result.exit_code == 0
        assert "built-in" in result.output
        assert "People" in result.output

    def test_communities(self, db_path):
        """Test the community table lists members."""
        result = runner.invoke(app, ["communities", "--db", str(db_path)])

        assert result.exit_code == 0
        assert "Communities" in result.output

    def test_communities_with_gapped_ids(self, db_path, tmp_path):
        """Test each community shows the color its nodes are drawn with."""
        star_file = tmp_path / "star.txt"
        star_file.write_text(format_relationships(STAR), encoding="utf-8")
        runner.invoke(app, ["load", str(star_file), "--db", str(db_path)])

        result = runner.invoke(app, ["communities", "--db", str(db_path)])

        assert result.exit_code == 0
        assert PALETTE[0] in result.output
        assert PALETTE[3] in result.output
        assert PALETTE[1] not in result.output

    def test_info(self, db_path, data_file):
        """Test details for a known person."""
        runner.invoke(app, ["load", str(data_file), "--db", str(db_path)])

        result = runner.invoke(app, ["info", "Tamia", "--db", str(db_path)])

        assert result.exit_code == 0
        assert "Total Connections: 2" in result.output
        assert "Nate" in result.output
        assert "Hunter" in result.output
        assert "Named by: Hunter, Nate" in result.output

    def test_info_unknown(self, db_path):
        """Test a missing person exits with an error."""
        result = runner.invoke(app, ["info", "Nobody", "--db", str(db_path)])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestRender:
    """Tests for the render command."""

    @pytest.mark.parametrize("layout", ["force", "circular", "hierarchical"])
    def test_render_layouts(self, db_path, tmp_path, layout):
        """Test each layout produces an SVG with every person drawn."""
        out = tmp_path / f"{layout}.svg"

        result = runner.invoke(
            app,
            ["render", "--layout", layout, "--out", str(out), "--db", str(db_path)],
        )

        assert result.exit_code == 0, result.output
        svg = out.read_text(encoding="utf-8")
        assert svg.startswith("<svg")
        assert svg.count("<circle") == 14

    def test_render_with_selection(self, db_path, tmp_path):
        """Test a selected person gets the white border."""
        out = tmp_path / "selected.svg"

        result = runner.invoke(
            app,
            ["render", "-l", "circular", "--select", "Hannah", "-o", str(out), "--db", str(db_path)],
        )

        assert result.exit_code == 0, result.output
        assert 'stroke="#fff"' in out.read_text(encoding="utf-8")

    def test_render_unknown_selection(self, db_path, tmp_path):
        """Test selecting someone absent is an error."""
        result = runner.invoke(
            app,
            ["render", "--select", "Nobody", "-o", str(tmp_path / "x.svg"), "--db", str(db_path)],
        )

        assert result.exit_code == 1

    def test_render_search(self, db_path, tmp_path):
        """Test the search narrows what is drawn."""
        out = tmp_path / "search.svg"

        result = runner.invoke(
            app,
            ["render", "-l", "circular", "-s", "kay", "-o", str(out), "--db", str(db_path)],
        )

        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").count("<circle") == 1
