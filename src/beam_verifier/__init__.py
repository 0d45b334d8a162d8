"""Signature verification gateway for SORACOM Beam forwarded requests."""

__version__ = "1.0.0"
