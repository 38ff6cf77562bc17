"""Copilot Registry - typed collections of Copilot content for the web."""

__version__ = "0.1.0"
