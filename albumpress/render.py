"""HTML for gallery index, album pages and single image pages.

Every writer skips its file when it already exists, unless forced, so a
rerun after an interrupted build only fills in what is missing.
"""

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment
from loguru import logger

from .files import write_text
from .models import ImageRecord
from .pagination import Page, page_filename, page_number_for

_jinja_env = Environment(autoescape=True)
Template = _jinja_env.from_string

STYLESHEET = "style.css"


def image_page_filename(index: int) -> str:
    return f"image-{index}.html"


@dataclass
class AlbumLink:
    """How the gallery index shows one album."""

    name: str
    url: str
    thumb_url: str | None


# ---------------------------------------------------------------------------
# Shared CSS
# ---------------------------------------------------------------------------

SHARED_CSS = """\
*, *::before, *::after { box-sizing: border-box; }
body {
  margin: 0; padding: 24px;
  font-family: system-ui, -apple-system, sans-serif;
  font-size: 15px; line-height: 1.6;
  background: #0e0e0e; color: #c8c8c8;
}
a { color: #7db8e0; text-decoration: none; }
a:hover { color: #aed4f0; }
h1 { font-size: 1.5em; font-weight: 500; margin: 0 0 4px; }
.subtitle { font-size: 0.88em; color: #777; margin-bottom: 24px; }

/* thumbnail grid */
.grid {
  display: grid;
  grid-template-columns: repeat(auto-fill, minmax(160px, 1fr));
  gap: 3px;
}
.grid a { display: block; aspect-ratio: 1; overflow: hidden; border-radius: 2px; }
.grid img { width: 100%; height: 100%; object-fit: cover; display: block; }
.album { display: inline-block; margin: 0 12px 18px 0; vertical-align: top; }
.album p { margin: 4px 0; }
.missing {
  display: flex; align-items: center; justify-content: center;
  width: 100%; height: 100%; min-height: 120px;
  background: #1a1a1a; color: #555; font-size: 0.82em; padding: 6px;
}

/* navigation */
.nav {
  margin-bottom: 20px; padding-bottom: 12px;
  border-bottom: 1px solid #1a1a1a;
  font-size: 0.88em; display: flex; gap: 16px; flex-wrap: wrap;
}
.nav a { color: #666; }
.nav a:hover { color: #aaa; }
.pages { margin-top: 24px; font-size: 0.88em; color: #777; }
.download { margin-top: 12px; font-size: 0.88em; }

/* image page */
.image-page { max-width: 1200px; margin: 0 auto; }
.media { margin: 20px 0; }
.media img { max-width: 100%; max-height: 82vh; display: block; border-radius: 3px; }
.description { margin: 16px 0; color: #b0b0b0; }

@media (max-width: 640px) {
  body { padding: 14px; }
  .grid { grid-template-columns: repeat(auto-fill, minmax(110px, 1fr)); gap: 2px; }
  .media img { max-height: 60vh; }
}
"""

GALLERY_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<link rel="stylesheet" href="style.css">
</head>
<body>
<h1>{{ title }}</h1>
<p class="subtitle">{{ albums|length }} albums</p>
{% for album in albums %}
<div class="album">
  <a href="{{ album.url }}">{% if album.thumb_url %}<img src="{{ album.thumb_url }}" alt="{{ album.name }}">{% else %}<span class="missing">{{ album.name }}</span>{% endif %}</a>
  <p><a href="{{ album.url }}">{{ album.name }}</a></p>
</div>
{% endfor %}
</body>
</html>
""")

ALBUM_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}{% if page.total_pages > 1 %} ({{ page.number }}/{{ page.total_pages }}){% endif %}</title>
<link rel="stylesheet" href="style.css">
</head>
<body>
{% if gallery_name %}<div class="nav"><a href="../index.html">&larr; {{ gallery_name }}</a></div>{% endif %}
<h1>{{ title }}</h1>
<p class="subtitle">{{ image_count }} images</p>
<div class="grid">
{% for image in images %}<a href="{{ image.page_url }}" title="{{ image.record.description }}">{% if image.record.thumbnail_filename %}<img src="{{ image.record.thumbnail_filename }}" alt="{{ image.record.description }}" loading="lazy">{% else %}<span class="missing">{{ image.record.filename }}</span>{% endif %}</a>
{% endfor %}
</div>
{% if page.total_pages > 1 %}
<div class="pages">
  Page {{ page.number }} of {{ page.total_pages }}
  {% if page.previous_url %}&middot; <a href="{{ page.previous_url }}">&larr; previous page</a>{% endif %}
  {% if page.next_url %}&middot; <a href="{{ page.next_url }}">next page &rarr;</a>{% endif %}
</div>
{% endif %}
{% if zip_filename %}<div class="download"><a href="{{ zip_filename }}" download>Download all images ({{ zip_filename }})</a></div>{% endif %}
</body>
</html>
""")

IMAGE_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }} &mdash; {{ index + 1 }}/{{ total }}</title>
<link rel="stylesheet" href="style.css">
</head>
<body class="image-page">
<div class="nav">
  {% if gallery_name %}<a href="../index.html">{{ gallery_name }}</a>{% endif %}
  <a href="{{ album_url }}">&larr; {{ title }}</a>
  {% if previous_url %}<a href="{{ previous_url }}">&larr; previous</a>{% endif %}
  {% if next_url %}<a href="{{ next_url }}">next &rarr;</a>{% endif %}
</div>

<div class="media">
{% if image.large_filename %}
  {% if include_originals %}<a href="{{ image.filename }}">{% endif %}<img src="{{ image.large_filename }}" alt="{{ image.description }}">{% if include_originals %}</a>{% endif %}
{% else %}
  <span class="missing">{{ image.filename }} is not available</span>
{% endif %}
</div>

{% if image.description %}<div class="description">{{ image.description }}</div>{% endif %}
{% if include_originals %}<div class="subtitle"><a href="{{ image.filename }}">Original image</a></div>{% endif %}
</body>
</html>
""")


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------

def _write(path: Path, render, force: bool) -> bool:
    """Write render() to path unless it exists. Returns True if written."""
    if path.exists() and not force:
        logger.debug("Exists, skipping: {}", path)
        return False
    write_text(path, render())
    logger.debug("Wrote {}", path)
    return True


def write_stylesheet(out_dir: Path, force: bool = False) -> bool:
    return _write(out_dir / STYLESHEET, lambda: SHARED_CSS, force)


def write_gallery_index(out_dir: Path, title: str, albums: list[AlbumLink],
                        force: bool = False) -> bool:
    """The top level page linking every album."""
    return _write(
        out_dir / "index.html",
        lambda: GALLERY_TEMPLATE.render(title=title, albums=albums),
        force,
    )


def write_album_page(page: Page, out_dir: Path, title: str, image_count: int,
                     gallery_name: str | None = None, zip_filename: str | None = None,
                     force: bool = False) -> bool:
    """One page of thumbnails, each linking to its image page."""
    images = [
        {"record": record, "page_url": image_page_filename(page.start + i)}
        for i, record in enumerate(page.images)
    ]
    return _write(
        out_dir / page.filename,
        lambda: ALBUM_TEMPLATE.render(
            title=title,
            page=page,
            images=images,
            image_count=image_count,
            gallery_name=gallery_name,
            zip_filename=zip_filename,
        ),
        force,
    )


def write_image_page(images: list[ImageRecord], index: int, out_dir: Path, title: str,
                     page_size: int, gallery_name: str | None = None,
                     include_originals: bool = False, force: bool = False) -> bool:
    """The page for images[index].

    Previous/next follow the whole chosen sequence, across album page
    boundaries.
    """
    previous_url = image_page_filename(index - 1) if index > 0 else None
    next_url = image_page_filename(index + 1) if index < len(images) - 1 else None
    return _write(
        out_dir / image_page_filename(index),
        lambda: IMAGE_TEMPLATE.render(
            title=title,
            image=images[index],
            index=index,
            total=len(images),
            album_url=page_filename(page_number_for(index, page_size)),
            previous_url=previous_url,
            next_url=next_url,
            gallery_name=gallery_name,
            include_originals=include_originals,
        ),
        force,
    )
