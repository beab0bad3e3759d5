"""Command line interface."""

from hackmd_api.cli.main import cli


__all__ = ["cli"]
