"""Threshold BLS signatures, ECIES with recovery packages and distributed key generation."""

__version__ = "0.1.0"