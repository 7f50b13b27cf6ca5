"""Utility modules for image references and terminal output."""

from utils.image_utils import ImageReference, parse_image_reference
from utils.formatting import format_backend_report

__all__ = [
    "ImageReference",
    "parse_image_reference",
    "format_backend_report",
]
