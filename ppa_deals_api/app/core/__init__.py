"""Core infrastructure: settings, logging, errors and seed data."""
