"""
API module containing the relay routes and CORS helpers.
"""
