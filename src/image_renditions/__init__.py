"""Resized and cropped renditions of uploaded images, stored in S3."""

__version__ = "0.1.0"
