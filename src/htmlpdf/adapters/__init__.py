"""Adapters wrapping external conversion binaries."""
