"""Shared contracts and domain helpers for the SRE dashboard."""

from sre_shared._version import __version__

__all__ = ["__version__"]
