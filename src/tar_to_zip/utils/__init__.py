"""Utility functions for the tar to zip converter."""

from .compression import inflate, is_gzipped
from .filename import zip_filename_for

__all__ = ["inflate", "is_gzipped", "zip_filename_for"]
