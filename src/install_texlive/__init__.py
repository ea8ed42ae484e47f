"""Cached TeX Live provisioning for CI runners."""

__version__ = "0.4.0"
