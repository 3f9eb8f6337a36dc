"""
Tests for EditorConfig and the command line entry point.
"""

import io

import pytest
from PIL import Image

import open_transform
from OT_Libs.editor_config import EditorConfig


class TestEditorConfig:
    """Tests for EditorConfig."""

    def test_defaults(self):
        config = EditorConfig()
        assert config.accepted_types == ("image/*", "application/pdf")
        assert config.max_size_mb == 10
        assert config.output_formats == ("jpeg", "png", "webp")
        assert config.quality_bounds == (10, 100)
        assert config.scale_bounds == (10, 200)
        assert config.brightness_bounds == (0, 200)
        assert config.max_size_bytes == 10 * 1024 * 1024

    def test_round_trip(self):
        config = EditorConfig(max_size_mb=5, accepted_types=("image/png",))
        data = config.to_dict()

        assert data["accepted_types"] == ["image/png"]
        assert EditorConfig.from_dict(data) == config

    def test_from_dict_ignores_unknown_keys(self):
        config = EditorConfig.from_dict({"max_size_mb": 2, "theme": "dark"})
        assert config.max_size_mb == 2

    @pytest.mark.parametrize("kwargs", [
        {"max_size_mb": 0},
        {"output_formats": ("gif",)},
        {"output_formats": ()},
        {"scale_bounds": (200, 10)},
        {"default_quality": 5},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            EditorConfig(**kwargs)


class TestCommandLine:
    """Tests for open_transform.main with an input file."""

    def _write_png(self, path, size=(40, 20)):
        Image.new("RGBA", size, (0, 128, 255, 255)).save(path, format="PNG")
        return path

    def test_exports_edited_file(self, tmp_path, capsys):
        source = self._write_png(tmp_path / "photo.png")
        out_dir = tmp_path / "out"
        out_dir.mkdir()

        code = open_transform.main([
            str(source), "--width", "20", "--rotate", "90", "--rotate", "-180",
            "--format", "webp", "--quality", "80", "--output-dir", str(out_dir),
        ])

        assert code == 0
        exported = out_dir / "photo-edited.webp"
        assert exported.is_file()
        assert str(exported) in capsys.readouterr().out
        with Image.open(io.BytesIO(exported.read_bytes())) as decoded:
            assert decoded.size == (20, 10)

    def test_unsupported_format_fails(self, tmp_path):
        source = self._write_png(tmp_path / "photo.png")

        code = open_transform.main([str(source), "--format", "gif", "--output-dir", str(tmp_path)])

        assert code == 1
        assert not (tmp_path / "photo-edited.gif").exists()

    def test_too_large_fails(self, tmp_path):
        source = self._write_png(tmp_path / "photo.png", size=(400, 400))

        code = open_transform.main([str(source), "--max-size-mb", "0.0001",
                                    "--output-dir", str(tmp_path)])

        assert code == 1

    def test_missing_input_fails(self, tmp_path):
        assert open_transform.main([str(tmp_path / "nope.png")]) == 1
