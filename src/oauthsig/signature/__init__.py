"""OAuth 1.0 signature methods."""

from oauthsig.signature.base import (
    ACCESSOR_SUFFIX,
    SignatureMethod,
    build_base_string,
    normalize_parameters,
)
from oauthsig.signature.hmac_sha1 import HmacSha1
from oauthsig.signature.plaintext import Plaintext
from oauthsig.signature.registry import (
    SignatureMethodRegistry,
    default_registry,
    new_method,
    register_method,
    sign_message,
    verify_message,
)

__all__ = [
    "ACCESSOR_SUFFIX",
    "HmacSha1",
    "Plaintext",
    "SignatureMethod",
    "SignatureMethodRegistry",
    "build_base_string",
    "default_registry",
    "new_method",
    "normalize_parameters",
    "register_method",
    "sign_message",
    "verify_message",
]
