"""CLI tests; the interactive window is replaced by a scripted session."""

from pathlib import Path
import json

import pytest
from PIL import Image
from typer.testing import CliRunner

from plotview.regions.model import Color
from tests.helpers.pdf_factory import make_empty_pdf, make_encrypted_pdf, make_pdf_with_images

try:
    from plotview import cli
    from plotview.cli import app
    UI_AVAILABLE = True
except ImportError:
    UI_AVAILABLE = False

pytestmark = pytest.mark.skipif(not UI_AVAILABLE, reason="OpenCV not importable")

GREEN = Color(0, 200, 0, 255)


def plot_image():
    img = Image.new('RGB', (200, 100), color='white')
    img.paste((0, 0, 0), (20, 20, 60, 60))
    img.paste((0, 0, 0), (120, 20, 180, 80))
    return img


def scripted_viewer(clicks):
    """Build a run_viewer replacement that replays (button, x, y) clicks."""
    def run(session, settings=None):
        for button, x, y in clicks:
            session.pointer_moved(x, y)
            if button == "left":
                session.left_click()
            elif button == "right":
                session.right_click()
            elif button == "pick":
                session.pick_color(GREEN)
        return session.close()
    return run


@pytest.fixture
def two_regions(monkeypatch):
    clicks = [
        ("left", 10, 10), ("left", 70, 70),
        ("right", 10, 40), ("pick", 0, 0), ("left", 0, 0),
        ("left", 110, 10), ("left", 190, 90),
    ]
    monkeypatch.setattr(cli, "run_viewer", scripted_viewer(clicks))


class TestCLI:
    def test_help_works(self):
        runner = CliRunner()
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--out-dir" in result.stdout
        assert "--max-width" in result.stdout

    def test_crops_from_pdf(self, tmp_path, two_regions):
        pdf_path = make_pdf_with_images(tmp_path, [plot_image()], name="plot.pdf")
        out = tmp_path / "out"

        runner = CliRunner()
        result = runner.invoke(app, [str(pdf_path), "--out-dir", str(out)])

        assert result.exit_code == 0, result.output
        assert "Cropping complete" in result.stdout
        assert sorted(p.name for p in out.glob("*.png")) == ["plot-0.png", "plot-1.png"]

        with Image.open(out / "plot-0.png") as img:
            assert img.size == (60, 60)
            assert img.getpixel((15, 15)) == GREEN.to_tuple()
            assert img.getpixel((55, 55))[3] == 0

        manifest = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
        assert manifest["total_items"] == 2
        assert manifest["scale_ratio"] == 1.0

    def test_crops_from_raster_with_downscaled_preview(self, tmp_path, monkeypatch):
        image_path = tmp_path / "plot.png"
        plot_image().save(image_path)
        out = tmp_path / "out"
        monkeypatch.setattr(cli, "run_viewer", scripted_viewer([("left", 5, 5), ("left", 35, 35)]))

        runner = CliRunner()
        result = runner.invoke(app, [
            str(image_path), "-o", str(out),
            "--max-width", "100", "--max-height", "100",
            "--no-write-manifest",
        ])

        assert result.exit_code == 0, result.output
        assert not (out / "manifest.json").exists()
        with Image.open(out / "plot-0.png") as img:
            assert img.size == (60, 60)

    def test_nonexistent_file_error(self):
        runner = CliRunner()
        result = runner.invoke(app, ["nonexistent.pdf"])
        assert result.exit_code == 2

    def test_encrypted_pdf_error(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(app, [str(make_encrypted_pdf(tmp_path))])
        assert result.exit_code == 2

    def test_pdf_without_images_error(self, tmp_path):
        pdf_path = make_empty_pdf(tmp_path)

        runner = CliRunner()
        result = runner.invoke(app, [str(pdf_path)])
        assert result.exit_code == 1

    def test_undecodable_image_error(self, tmp_path):
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"garbage")

        runner = CliRunner()
        result = runner.invoke(app, [str(bad)])
        assert result.exit_code == 1
