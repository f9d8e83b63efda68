"""
albumpress: build a static photo gallery website from album files.

An album file lists images (filename, description, tags). Each album is
resized into thumbnails and large images, split over linked HTML pages, and
optionally bundled into a zip of the originals. A gallery ties several
albums together under one index page.
"""

__version__ = "0.1.0"
