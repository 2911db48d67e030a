"""Maintenance scripts, Go-style text templates and terminal UI pieces for Zsh setup."""

__version__ = "0.1.0"