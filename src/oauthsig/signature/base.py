"""Signature base strings and the signature method contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from oauthsig.common.encoding import form_encode, percent_encode, to_text
from oauthsig.common.errors import OAuthProblemError, ProblemCode
from oauthsig.message import ACCESSOR_SECRET, OAUTH_SIGNATURE, OAuthConsumer, OAuthMessage

ACCESSOR_SUFFIX = "-Accessor"


def _sort_key(name: Any, value: Any) -> str:
    return percent_encode(name) + " " + percent_encode(value)


def normalize_parameters(parameters: Iterable[tuple[Any, Any]] | None) -> str:
    """
    Normalize request parameters into the form signed by OAuth.

    ``oauth_signature`` is dropped; the rest are sorted by their encoded
    ``"name value"`` key and form-encoded. The sort is stable, so duplicate
    pairs keep their input order. A ``None`` value sorts and encodes as the
    empty string.

    Args:
        parameters: Name/value pairs in any order

    Returns:
        Normalized parameter string, empty when there are no parameters
    """
    if parameters is None:
        return ""
    keyed = [
        (_sort_key(name, value), (to_text(name), value))
        for name, value in parameters
        if name != OAUTH_SIGNATURE
    ]
    keyed.sort(key=lambda item: item[0])
    return form_encode(pair for _, pair in keyed)


def build_base_string(
    method: str,
    url: str,
    parameters: Iterable[tuple[Any, Any]] | None,
    consumer_secret: str | None = None,
    token_secret: str | None = None,
) -> str:
    """
    Build the signature base string.

    Each of method, URL, normalized parameters, consumer secret and token
    secret is percent-encoded as a whole, then the five are joined with ``&``.
    """
    return "&".join(
        [
            percent_encode(method),
            percent_encode(url),
            percent_encode(normalize_parameters(parameters)),
            percent_encode(consumer_secret or ""),
            percent_encode(token_secret or ""),
        ]
    )


class SignatureMethod(ABC):
    """
    A pair of algorithms for computing and verifying an OAuth signature.

    Instances hold the consumer and token secrets for one signing or
    verification and are not shared between requests.
    """

    def __init__(self) -> None:
        self._consumer_secret = ""
        self._token_secret = ""

    @property
    def consumer_secret(self) -> str:
        return self._consumer_secret

    @property
    def token_secret(self) -> str:
        return self._token_secret

    def initialize(
        self,
        name: str,
        consumer: OAuthConsumer,
        token_secret: str | None = None,
    ) -> None:
        """
        Set the secrets used by this method.

        When ``name`` carries the ``-Accessor`` suffix and the consumer has an
        accessor secret, that secret replaces the consumer secret.
        """
        secret = consumer.consumer_secret
        if name.endswith(ACCESSOR_SUFFIX):
            accessor_secret = consumer.get_property(ACCESSOR_SECRET)
            if accessor_secret is not None:
                secret = str(accessor_secret)
        self._consumer_secret = secret or ""
        self._token_secret = token_secret or ""

    @abstractmethod
    def sign_base_string(self, base_string: str) -> str:
        """Compute the signature for the given base string."""

    @abstractmethod
    def verify_base_string(self, signature: str, base_string: str) -> bool:
        """Return True if and only if the signature matches the base string."""

    def get_base_string(self, message: OAuthMessage) -> str:
        """
        Build the base string for a message with this method's secrets.

        Raises:
            OAuthProblemError: If the message has no method or URL
        """
        absent = [
            name
            for name, value in (("method", message.method), ("url", message.url))
            if not value
        ]
        if absent:
            raise OAuthProblemError(
                ProblemCode.PARAMETER_ABSENT,
                f"Message is missing {' and '.join(absent)}",
                missing=absent,
            )
        return build_base_string(
            message.method,
            message.url,
            message.parameters,
            self._consumer_secret,
            self._token_secret,
        )

    def get_signature(self, message: OAuthMessage) -> str:
        return self.sign_base_string(self.get_base_string(message))

    def sign(self, message: OAuthMessage) -> str:
        """Sign a message, appending ``oauth_signature`` to its parameters."""
        signature = self.get_signature(message)
        message.add_parameter(OAUTH_SIGNATURE, signature)
        return signature

    def verify(self, message: OAuthMessage) -> bool:
        """Verify the ``oauth_signature`` a message declares."""
        signature = message.signature
        if signature is None:
            return False
        return self.verify_base_string(signature, self.get_base_string(message))
