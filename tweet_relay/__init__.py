"""
Tweet Relay

A stateless HTTP handler that posts a base64 image to Twitter and
returns the public URL of the posted media.
"""

__version__ = "1.0.0"
