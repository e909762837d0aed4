"""
Top‑level package for the PPA Deals API.

This file makes ``ppa_deals_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``ppa_deals_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
