"""Unit tests for the database layer.

Covers the ``User`` entity definition and the ``UserRepository`` queries.
All tests use in-memory SQLite or mocks so no database service is needed.
"""
