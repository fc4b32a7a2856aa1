"""
Tests for the pixelstream command line entry point.
"""

from conftest import make_image
from pixelstream.app import cli


def write_png(tmp_path):
    path = tmp_path / "in.png"
    make_image("RGBA", 2, 1, [(1, 2, 3, 4), (5, 6, 7, 8)]).save(path)
    return str(path)


class TestCli:
    def test_info(self, tmp_path, capsys):
        assert cli.main([write_png(tmp_path), "--info"]) == 0
        assert capsys.readouterr().out.strip() == "2x1 RGBA8 8"

    def test_info_no_alpha(self, tmp_path, capsys):
        assert cli.main([write_png(tmp_path), "--info", "--no-alpha"]) == 0
        assert capsys.readouterr().out.strip() == "2x1 RGB8 6"

    def test_output_file(self, tmp_path):
        out = tmp_path / "out.raw"
        assert cli.main([write_png(tmp_path), "-o", str(out), "--chunk-size", "3"]) == 0
        assert out.read_bytes() == bytes([1, 2, 3, 4, 5, 6, 7, 8])

    def test_pixel_addressing_rounds_chunk_size(self, tmp_path):
        out = tmp_path / "out.raw"
        args = [write_png(tmp_path), "-o", str(out), "--chunk-size", "3", "--addressing", "pixel"]
        assert cli.main(args) == 0
        assert out.read_bytes() == bytes([1, 2, 3, 4, 5, 6, 7, 8])

    def test_addressing_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(cli.ADDRESSING_ENV_VAR, "pixel")
        args = cli.parse_args([write_png(tmp_path)])
        assert cli.build_settings(args).addressing.value == "pixel"

    def test_unsupported_file(self, tmp_path, capsys):
        path = tmp_path / "in.gif"
        path.write_bytes(b"GIF89a")
        assert cli.main([str(path), "--info"]) == 2
        assert "Supported formats" in capsys.readouterr().err

    def test_bad_chunk_size(self, tmp_path, capsys):
        assert cli.main([write_png(tmp_path), "--chunk-size", "0"]) == 2
        assert "--chunk-size" in capsys.readouterr().err
