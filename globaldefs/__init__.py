"""Validation engine for a high-availability daemon's global_defs section."""

__version__ = "0.1.0"
