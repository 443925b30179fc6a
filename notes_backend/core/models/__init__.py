"""
Shared models of the notes backend.

- domain: enums shared by entities, services and API schemas
- io: request and response schemas for the HTTP API
"""
