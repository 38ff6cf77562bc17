"""Core path identity, classification and catalog logic."""
