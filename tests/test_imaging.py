import pytest
from PIL import Image

from albumpress.errors import InvalidFilename, TransformFailure
from albumpress.imaging import (
    PillowTransform,
    large_filename,
    split_filename,
    thumbnail_filename,
)

from .conftest import make_image


def test_derived_names():
    assert thumbnail_filename("photo.jpg", 100) == "photo_100_100.jpg"
    assert large_filename("photo.jpg", 600) == "photo_600.jpg"


@pytest.mark.parametrize("name", ["photo.v2.jpg", "photo", "a.b.c.d"])
def test_names_need_exactly_one_dot(name):
    with pytest.raises(InvalidFilename):
        split_filename(name)
    with pytest.raises(InvalidFilename):
        thumbnail_filename(name, 100)


def test_landscape_thumbnail_crops_left_and_right(tmp_path):
    # Red 40px margins either side of a 40px blue square
    img = Image.new("RGB", (120, 40), (255, 0, 0))
    img.paste((0, 0, 255), (40, 0, 80, 40))
    src = tmp_path / "wide.png"
    img.save(src)
    dst = tmp_path / "wide_20_20.png"

    PillowTransform().make_thumbnail(src, dst, 20)

    with Image.open(dst) as thumb:
        assert thumb.size == (20, 20)
        r, g, b = thumb.convert("RGB").getpixel((10, 10))
        assert b > 200 and r < 50


def test_portrait_thumbnail_crops_top_and_bottom(tmp_path):
    img = Image.new("RGB", (40, 120), (255, 0, 0))
    img.paste((0, 0, 255), (0, 40, 40, 80))
    src = tmp_path / "tall.png"
    img.save(src)
    dst = tmp_path / "tall_20_20.png"

    PillowTransform().make_thumbnail(src, dst, 20)

    with Image.open(dst) as thumb:
        assert thumb.size == (20, 20)
        for y in (5, 10, 14):
            r, g, b = thumb.convert("RGB").getpixel((10, y))
            assert b > 200 and r < 50


def test_thumbnail_of_small_image_is_enlarged_to_size(tmp_path):
    src = make_image(tmp_path / "small.jpg", (10, 20))
    dst = tmp_path / "small_50_50.jpg"
    PillowTransform().make_thumbnail(src, dst, 50)
    with Image.open(dst) as thumb:
        assert thumb.size == (50, 50)


def test_large_caps_longest_side(tmp_path):
    src = make_image(tmp_path / "big.jpg", (400, 200))
    dst = tmp_path / "big_100.jpg"
    PillowTransform().make_large(src, dst, 100)
    with Image.open(dst) as large:
        assert large.size == (100, 50)


def test_large_within_bounds_is_copied(tmp_path):
    src = make_image(tmp_path / "small.jpg", (80, 60))
    dst = tmp_path / "small_100.jpg"
    PillowTransform().make_large(src, dst, 100)
    assert dst.read_bytes() == src.read_bytes()


def test_large_applies_exif_orientation(tmp_path):
    exif = Image.Exif()
    exif[0x0112] = 6  # rotated 90 degrees
    src = make_image(tmp_path / "rotated.jpg", (80, 40), exif=exif)
    dst = tmp_path / "rotated_100.jpg"

    PillowTransform().make_large(src, dst, 100)

    with Image.open(dst) as large:
        assert large.size == (40, 80)


def test_percent_mode_scales_both_variants(tmp_path):
    src = make_image(tmp_path / "p.jpg", (200, 100))
    transform = PillowTransform("percent")
    transform.make_thumbnail(src, tmp_path / "p_10_10.jpg", 10)
    transform.make_large(src, tmp_path / "p_50.jpg", 50)
    with Image.open(tmp_path / "p_10_10.jpg") as thumb:
        assert thumb.size == (20, 10)
    with Image.open(tmp_path / "p_50.jpg") as large:
        assert large.size == (100, 50)


def test_unreadable_source_is_a_transform_failure(tmp_path):
    src = tmp_path / "broken.jpg"
    src.write_bytes(b"not an image")
    dst = tmp_path / "broken_20_20.jpg"
    with pytest.raises(TransformFailure):
        PillowTransform().make_thumbnail(src, dst, 20)
    assert not dst.exists()


def test_missing_source_is_a_transform_failure(tmp_path):
    with pytest.raises(TransformFailure):
        PillowTransform().make_large(tmp_path / "gone.jpg", tmp_path / "gone_20.jpg", 20)
