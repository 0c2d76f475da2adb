"""Pytest configuration and fixtures."""

import pytest
import structlog

from oauthsig.common.settings import Settings
from oauthsig.message import ACCESSOR_SECRET, OAuthConsumer, OAuthMessage
from oauthsig.signature.registry import SignatureMethodRegistry


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        log_level="DEBUG",
        default_signature_method="HMAC-SHA1",
        realm="http://example.com/",
        verify_exempt_paths=["/health"],
    )


@pytest.fixture
def consumer() -> OAuthConsumer:
    """Consumer without an accessor secret."""
    return OAuthConsumer(consumer_key="abcd", consumer_secret="secret")


@pytest.fixture
def accessor_consumer() -> OAuthConsumer:
    """Consumer carrying an accessor secret."""
    return OAuthConsumer(
        consumer_key="abcd",
        consumer_secret="secret",
        properties={ACCESSOR_SECRET: "accessor-secret"},
    )


@pytest.fixture
def sample_message() -> OAuthMessage:
    """Message from the worked example."""
    return OAuthMessage(
        method="GET",
        url="http://example.com/resource",
        parameters=[
            ("oauth_consumer_key", "abcd"),
            ("oauth_nonce", "1"),
            ("a", "1"),
            ("a", "2"),
        ],
    )


@pytest.fixture
def registry() -> SignatureMethodRegistry:
    """Registry isolated from the process-wide one."""
    return SignatureMethodRegistry.with_builtins()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
