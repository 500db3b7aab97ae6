"""
Auth module containing the OAuth 1.0a request signer.
"""

from .oauth1 import Consumer, Token, OAuth1Signer, encode_form

__all__ = ["Consumer", "Token", "OAuth1Signer", "encode_form"]
