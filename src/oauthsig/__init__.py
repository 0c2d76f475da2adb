"""
oauthsig: OAuth 1.0 request signatures.

Builds signature base strings from request parameters and signs or verifies
them with pluggable signature methods selected by name.
"""

__version__ = "1.0.0"
