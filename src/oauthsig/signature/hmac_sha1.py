"""HMAC-SHA1 signature method."""

from __future__ import annotations

import hashlib
import hmac

from oauthsig.common.encoding import base64_decode, base64_encode, percent_encode
from oauthsig.signature.base import SignatureMethod


class HmacSha1(SignatureMethod):
    """Base64-encoded HMAC-SHA1 keyed with the encoded consumer and token secrets."""

    NAME = "HMAC-SHA1"

    def _key(self) -> bytes:
        key = percent_encode(self.consumer_secret) + "&" + percent_encode(self.token_secret)
        return key.encode("utf-8")

    def _digest(self, base_string: str) -> bytes:
        return hmac.new(self._key(), base_string.encode("utf-8"), hashlib.sha1).digest()

    def sign_base_string(self, base_string: str) -> str:
        return base64_encode(self._digest(base_string))

    def verify_base_string(self, signature: str, base_string: str) -> bool:
        try:
            candidate = base64_decode(signature)
        except ValueError:
            return False
        return hmac.compare_digest(self._digest(base_string), candidate)
