"""
Version 1 of the HTTP API.

- health: liveness and version endpoints (served at the root)
- auth: registration, login, verification, password reset, logout
- users: profile and user administration
"""
