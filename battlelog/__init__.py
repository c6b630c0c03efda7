"""Clash Royale battle logger: fetch battles, store them, analyze them."""

__version__ = "0.1.0"
