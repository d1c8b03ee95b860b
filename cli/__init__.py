"""
CLI module for Sociogram.

The command-line interface providing load, reset, show, communities,
info and render commands.
"""

from cli.main import app

__all__ = ["app"]
