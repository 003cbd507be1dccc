"""Deskmap - desk layout editor, viewer and directory sync service."""

from deskmap.__version__ import __version__

__all__ = ["__version__"]
