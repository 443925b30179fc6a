"""
HTTP API of the notes backend.
"""
