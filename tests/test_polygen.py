import numpy as np
import pytest
from PIL import Image

from polyevolve.polygen import main, render_blank


def test_render_blank_is_uniform_and_opaque():
    pixels = render_blank(8)
    assert pixels.shape == (8, 8, 4)
    assert (pixels == pixels[0, 0]).all()
    assert pixels[0, 0, 3] == 255


def test_render_blank_background_is_bluish():
    red, green, blue, _ = render_blank(2)[0, 0]
    assert red < green < blue


def test_render_blank_rejects_bad_size():
    with pytest.raises(ValueError):
        render_blank(0)


def test_main_writes_png(tmp_path, capsys):
    target = tmp_path / "blank.png"
    assert main(["--size", "8", "--output", str(target)]) == 0
    with Image.open(target) as loaded:
        assert loaded.size == (8, 8)
        assert np.array_equal(np.asarray(loaded.convert("RGBA")), render_blank(8))
    assert str(target) in capsys.readouterr().out


def test_main_default_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    with Image.open(tmp_path / "image.png") as loaded:
        assert loaded.size == (256, 256)


def test_main_rejects_bad_size(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--size", "0", "--output", str(tmp_path / "x.png")])
    assert excinfo.value.code == 2
    assert not (tmp_path / "x.png").exists()