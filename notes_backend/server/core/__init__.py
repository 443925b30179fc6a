"""
Server core: configuration settings and static constants.
"""
