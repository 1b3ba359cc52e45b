# site_pulse/__init__.py
"""
SitePulse package initializer.
Defines the package version; the CLI lives in :mod:`site_pulse.cli`.
"""
__version__ = "0.1.0"

__all__ = ["__version__"]
