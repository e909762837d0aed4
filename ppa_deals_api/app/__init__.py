"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (settings, logging, errors and the seed data),
``services`` (the deal store), ``schemas`` (Pydantic response models)
and ``api`` (the routers mounted by ``main.create_app``).
"""

from .main import app  # noqa: F401
