"""
Notes Backend.

Account and authentication service for the notes application: registration
with e-mail verification, JWT login, password reset and user administration.
"""
