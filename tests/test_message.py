"""Tests for OAuth messages and Authorization headers."""

import pytest

from oauthsig.common.errors import OAuthProblemError, ProblemCode
from oauthsig.message import (
    OAuthConsumer,
    OAuthMessage,
    Parameter,
    parse_authorization_header,
    to_parameters,
)


class TestOAuthMessage:
    """Test message parameter helpers."""

    def test_pairs_become_parameters(self):
        """Plain tuples are converted to Parameter values."""
        message = OAuthMessage("GET", "http://e.com/", [("a", "1")])
        assert message.parameters == [Parameter("a", "1")]
        assert isinstance(message.parameters[0], Parameter)

    def test_mapping_parameters(self):
        """Mappings convert in iteration order."""
        assert to_parameters({"b": "2", "a": None}) == [Parameter("b", "2"), Parameter("a", None)]
        assert to_parameters(None) == []

    def test_get_parameter_first_value(self):
        """The first value of a repeated name is returned."""
        message = OAuthMessage("GET", "http://e.com/", [("a", "1"), ("a", "2")])
        assert message.get_parameter("a") == "1"
        assert message.get_parameter("missing") is None

    def test_accessors(self, sample_message):
        """Well-known oauth_ parameters have accessors."""
        sample_message.add_parameter("oauth_signature_method", "PLAINTEXT")
        sample_message.add_parameter("oauth_token", "tok")
        assert sample_message.consumer_key == "abcd"
        assert sample_message.signature_method == "PLAINTEXT"
        assert sample_message.token == "tok"
        assert sample_message.signature is None

    def test_require_parameters(self, sample_message):
        """Missing required parameters are reported together."""
        sample_message.require_parameters("oauth_consumer_key")
        with pytest.raises(OAuthProblemError) as exc_info:
            sample_message.require_parameters("oauth_consumer_key", "oauth_token", "oauth_signature")
        error = exc_info.value
        assert error.problem == ProblemCode.PARAMETER_ABSENT
        assert error.parameters["oauth_parameters_absent"] == "oauth_token&oauth_signature"

    def test_authorization_header(self):
        """Only oauth_ parameters go into the header, encoded."""
        message = OAuthMessage(
            "GET",
            "http://e.com/",
            [("oauth_consumer_key", "a b"), ("size", "large"), ("oauth_signature", "x=")],
        )
        header = message.to_authorization_header(realm="http://e.com/")
        assert header == (
            'OAuth realm="http%3A%2F%2Fe.com%2F", '
            'oauth_consumer_key="a%20b", oauth_signature="x%3D"'
        )


class TestOAuthConsumer:
    """Test consumer properties."""

    def test_properties(self):
        """Properties are optional extras."""
        consumer = OAuthConsumer("key")
        assert consumer.consumer_secret is None
        assert consumer.get_property("oauth_accessor_secret") is None
        consumer.set_property("oauth_accessor_secret", "s")
        assert consumer.get_property("oauth_accessor_secret") == "s"


class TestParseAuthorizationHeader:
    """Test Authorization header parsing."""

    def test_parse(self):
        """Parameters are decoded and realm is dropped."""
        header = 'OAuth realm="Photos", oauth_consumer_key="a%20b", oauth_nonce="1"'
        assert parse_authorization_header(header) == [
            Parameter("oauth_consumer_key", "a b"),
            Parameter("oauth_nonce", "1"),
        ]

    def test_roundtrip_header(self):
        """A rendered header parses back to its oauth_ parameters."""
        message = OAuthMessage("GET", "http://e.com/", [("oauth_signature", "a+b/c=")])
        parsed = parse_authorization_header(message.to_authorization_header(realm="r"))
        assert parsed == [Parameter("oauth_signature", "a+b/c=")]

    @pytest.mark.parametrize("header", [None, "", "Bearer abc", "Basic dXNlcjpwYXNz"])
    def test_other_schemes(self, header):
        """Non-OAuth headers yield no parameters."""
        assert parse_authorization_header(header) == []

    def test_malformed(self):
        """Unquoted values are rejected."""
        with pytest.raises(ValueError):
            parse_authorization_header("OAuth oauth_nonce=1")
