"""Registry mapping OAuth signature method names to implementations."""

from __future__ import annotations

import threading
from collections.abc import Callable

from oauthsig.common.encoding import percent_encode
from oauthsig.common.errors import OAuthProblemError, ProblemCode
from oauthsig.message import OAuthConsumer, OAuthMessage
from oauthsig.signature.base import ACCESSOR_SUFFIX, SignatureMethod
from oauthsig.signature.hmac_sha1 import HmacSha1
from oauthsig.signature.plaintext import Plaintext


SignatureMethodFactory = Callable[[], SignatureMethod]


class SignatureMethodRegistry:
    """
    Thread-safe mapping from signature method names to factories.

    Lookups read a snapshot of the mapping; registrations copy it under a
    lock and swap it in, so a concurrent ``resolve`` never sees a partially
    updated mapping and no registration is lost.
    """

    def __init__(self) -> None:
        self._factories: dict[str, SignatureMethodFactory] = {}
        self._lock = threading.Lock()

    @classmethod
    def with_builtins(cls) -> SignatureMethodRegistry:
        """Create a registry holding HMAC-SHA1 and PLAINTEXT and their accessor forms."""
        registry = cls()
        for method in (HmacSha1, Plaintext):
            registry._factories[method.NAME] = method
            registry._factories[method.NAME + ACCESSOR_SUFFIX] = method
        return registry

    def register(self, name: str, factory: SignatureMethodFactory) -> None:
        """Register ``factory`` under ``name``; a later registration replaces it."""
        with self._lock:
            factories = dict(self._factories)
            factories[name] = factory
            self._factories = factories

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def resolve(
        self,
        name: str | None,
        consumer: OAuthConsumer,
        token_secret: str | None = None,
    ) -> SignatureMethod:
        """
        Create and initialize a new signature method instance.

        Args:
            name: Signature method name, e.g. from ``oauth_signature_method``
            consumer: Source of the consumer and accessor secrets
            token_secret: Token secret, if any

        Returns:
            A fresh instance owned by the caller

        Raises:
            OAuthProblemError: ``signature_method_rejected`` for unknown names
        """
        factories = self._factories
        factory = factories.get(name) if name is not None else None
        if factory is None:
            raise OAuthProblemError(
                ProblemCode.SIGNATURE_METHOD_REJECTED,
                f"Signature method not acceptable: {name!r}",
                oauth_acceptable_signature_methods="&".join(
                    percent_encode(known) for known in sorted(factories)
                ),
            )
        method = factory()
        method.initialize(name, consumer, token_secret)
        return method


default_registry = SignatureMethodRegistry.with_builtins()


def register_method(name: str, factory: SignatureMethodFactory) -> None:
    """Register a signature method with the process-wide registry."""
    default_registry.register(name, factory)


def new_method(
    name: str | None,
    consumer: OAuthConsumer,
    token_secret: str | None = None,
    registry: SignatureMethodRegistry | None = None,
) -> SignatureMethod:
    """Resolve a signature method from the given or process-wide registry."""
    if registry is None:
        registry = default_registry
    return registry.resolve(name, consumer, token_secret)


def sign_message(
    message: OAuthMessage,
    consumer: OAuthConsumer,
    token_secret: str | None = None,
    registry: SignatureMethodRegistry | None = None,
) -> str:
    """Sign a message with the method named by its ``oauth_signature_method``."""
    method = new_method(message.signature_method, consumer, token_secret, registry)
    return method.sign(message)


def verify_message(
    message: OAuthMessage,
    consumer: OAuthConsumer,
    token_secret: str | None = None,
    registry: SignatureMethodRegistry | None = None,
) -> bool:
    """Verify a message with the method named by its ``oauth_signature_method``."""
    method = new_method(message.signature_method, consumer, token_secret, registry)
    return method.verify(message)
