"""PLAINTEXT signature method."""

from __future__ import annotations

import hmac

from oauthsig.common.encoding import percent_encode
from oauthsig.signature.base import SignatureMethod


class Plaintext(SignatureMethod):
    """The signature is the encoded secrets themselves; the base string is unused."""

    NAME = "PLAINTEXT"

    def sign_base_string(self, base_string: str) -> str:
        return percent_encode(self.consumer_secret) + "&" + percent_encode(self.token_secret)

    def verify_base_string(self, signature: str, base_string: str) -> bool:
        expected = self.sign_base_string(base_string)
        return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
