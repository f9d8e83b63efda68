from loguru import logger
from typer.testing import CliRunner

from albumpress.cli import app
from albumpress.metadata import parse_album_file

runner = CliRunner()


def test_make_album(photo_dir, tmp_path):
    site = tmp_path / "site"
    result = runner.invoke(app, [
        "make-album",
        "--album-file", str(photo_dir / "images.txt"),
        "--image-dir", str(photo_dir),
        "--install-dir", str(site),
        "--title", "Trip",
        "--tags", "x",
        "--thumb-size", "20",
        "--large-size", "50",
        "--page-size", "1",
        "--include-zip",
    ])

    assert result.exit_code == 0, result.output
    assert {"index.html", "page-2.html", "Trip.zip", "a_20_20.jpg", "b_50.jpg"} <= {
        p.name for p in site.iterdir()
    }
    assert not (site / "page-3.html").exists()


def test_make_album_bad_album_file_exits_1(photo_dir, tmp_path):
    (photo_dir / "images.txt").write_text("a.jpg\nTag: x\nlate\n")
    result = runner.invoke(app, [
        "make-album",
        "--album-file", str(photo_dir / "images.txt"),
        "--image-dir", str(photo_dir),
        "--install-dir", str(tmp_path / "site"),
    ])
    assert result.exit_code == 1
    assert "parsing album file" in result.output


def test_make_album_rejects_bad_page_size(photo_dir, tmp_path):
    result = runner.invoke(app, [
        "make-album",
        "--album-file", str(photo_dir / "images.txt"),
        "--image-dir", str(photo_dir),
        "--install-dir", str(tmp_path / "site"),
        "--page-size", "0",
    ])
    assert result.exit_code == 2


def test_make_gallery(photo_dir, tmp_path):
    gallery_file = tmp_path / "gallery.txt"
    gallery_file.write_text(
        f"album-name = Trip\nalbum-dir = {photo_dir}\nalbum-subdir = trip\n"
        f"album-file = {photo_dir / 'images.txt'}\n"
    )
    site = tmp_path / "site"
    result = runner.invoke(app, [
        "--verbose",
        "make-gallery",
        "--gallery-file", str(gallery_file),
        "--install-dir", str(site),
        "--thumb-size", "20",
        "--large-size", "50",
        "--seed", "3",
    ])

    assert result.exit_code == 0, result.output
    assert 'href="trip/index.html"' in (site / "index.html").read_text()
    assert (site / "trip" / "image-2.html").exists()


def test_add_images(tmp_path):
    (tmp_path / "old.txt").write_text("IMG_3.jpg\n\nIMG_1.jpg\n")
    (tmp_path / "new.txt").write_text("IMG_2.jpg\nNew one\n")
    out = tmp_path / "out.txt"

    result = runner.invoke(app, [
        "add-images",
        "--album-file", str(tmp_path / "old.txt"),
        "--new-album-file", str(tmp_path / "new.txt"),
        "--output-file", str(out),
    ])

    assert result.exit_code == 0, result.output
    assert [r.filename for r in parse_album_file(out)] == ["IMG_1.jpg", "IMG_2.jpg", "IMG_3.jpg"]


def test_make_album_file(tmp_path):
    (tmp_path / "b.jpg").write_bytes(b"")
    (tmp_path / "a.jpg").write_bytes(b"")

    result = runner.invoke(app, ["make-album-file", str(tmp_path), "Summer"])

    assert result.exit_code == 0, result.output
    records = parse_album_file(tmp_path / "images.txt")
    assert [(r.filename, r.description) for r in records] == [("a.jpg", "Summer"), ("b.jpg", "Summer")]


def test_make_album_file_recursive(tmp_path):
    for sub in ["one", "two"]:
        (tmp_path / sub).mkdir()
        (tmp_path / sub / f"{sub}.jpg").write_bytes(b"")

    result = runner.invoke(app, ["make-album-file", "--recursive", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert [r.filename for r in parse_album_file(tmp_path / "one" / "images.txt")] == ["one.jpg"]
    assert [r.filename for r in parse_album_file(tmp_path / "two" / "images.txt")] == ["two.jpg"]
    assert not (tmp_path / "images.txt").exists()


def test_log_file(photo_dir, tmp_path):
    log = tmp_path / "build.log"
    result = runner.invoke(app, [
        "--log-file", str(log),
        "make-album",
        "--album-file", str(photo_dir / "images.txt"),
        "--image-dir", str(photo_dir),
        "--install-dir", str(tmp_path / "site"),
        "--title", "Trip",
        "--thumb-size", "20",
        "--large-size", "50",
    ])
    # Flushes the queued file sink
    logger.remove()

    assert result.exit_code == 0, result.output
    text = log.read_text(encoding="utf-8")
    assert "Trip: parsing album file..." in text
    assert "Trip: generating HTML..." in text


def test_make_gallery_invalid_utf8_exits_1(tmp_path):
    gallery = tmp_path / "gallery.txt"
    gallery.write_bytes(b"album-name = \xff\xfe\n")

    result = runner.invoke(app, [
        "make-gallery",
        "--gallery-file", str(gallery),
        "--install-dir", str(tmp_path / "site"),
    ])

    assert result.exit_code == 1
    assert "not valid UTF-8" in result.output
