import numpy as np
import pytest
from PIL import Image

from asciigenetic.image_processor import ImageProcessor


@pytest.fixture
def processor():
    return ImageProcessor()


def test_convert_to_grayscale_dimensions(processor):
    gray = processor.convert_to_grayscale(Image.new("RGB", (10, 10)))
    assert gray.size == (10, 10)
    assert gray.mode == "L"


def test_resize_image(processor):
    resized = processor.resize_image(Image.new("RGB", (100, 100)), 50, 50)
    assert resized.size == (50, 50)
    assert resized.mode == "RGB"


def test_prepare_target_image(processor):
    result = processor.prepare_target_image(Image.new("RGB", (100, 100)), 50, 50)
    assert result.size == (50, 50)
    assert result.mode == "L"


@pytest.mark.parametrize(
    "color, expected",
    [
        ((0, 0, 0), 0),
        ((255, 255, 255), 255),
        ((255, 0, 0), 54),
        ((0, 255, 0), 182),
        ((0, 0, 255), 18),
    ],
)
def test_grayscale_uses_rec709_weights(processor, color, expected):
    gray = np.asarray(processor.convert_to_grayscale(Image.new("RGB", (3, 3), color)))
    assert (gray == expected).all()


def test_grayscale_input_unchanged(processor):
    gray = np.asarray(processor.convert_to_grayscale(Image.new("L", (4, 4), 123)))
    assert (gray == 123).all()


def test_uniform_image_stays_uniform_after_prepare(processor):
    result = np.asarray(
        processor.prepare_target_image(Image.new("RGB", (40, 30), (255, 255, 255)), 7, 5)
    )
    assert result.shape == (5, 7)
    assert (result == 255).all()


def test_resize_rejects_zero_size(processor):
    with pytest.raises(ValueError):
        processor.resize_image(Image.new("RGB", (10, 10)), 0, 5)


def test_load_image_round_trip(processor, tmp_path):
    path = tmp_path / "sample.png"
    Image.new("RGB", (12, 8), (10, 20, 30)).save(path)
    loaded = processor.load_image(path)
    assert loaded.size == (12, 8)
    assert loaded.convert("RGB").getpixel((0, 0)) == (10, 20, 30)


def test_load_image_missing_file(processor, tmp_path):
    with pytest.raises(FileNotFoundError):
        processor.load_image(tmp_path / "missing.png")


def test_load_image_not_an_image(processor, tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("not an image")
    with pytest.raises(OSError):
        processor.load_image(path)