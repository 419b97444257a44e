"""ABOUTME: Pokemon catalog built on the public PokeAPI.
ABOUTME: Exposes the package version used by settings and the CLI."""

__version__ = "0.1.0"
