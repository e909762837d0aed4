"""
API package containing the HTTP routes.

``router`` aggregates the domain routers; it is mounted under ``/api``
by ``main.create_app``.
"""
