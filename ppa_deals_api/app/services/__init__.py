"""
Service layer abstraction.

The deal store encapsulates all business logic over the in‑memory
collection so API handlers stay thin.
"""
