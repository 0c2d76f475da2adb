"""OAuth request messages, parameters and consumers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from oauthsig.common.encoding import percent_decode, percent_encode
from oauthsig.common.errors import OAuthProblemError, ProblemCode

OAUTH_SIGNATURE = "oauth_signature"
OAUTH_SIGNATURE_METHOD = "oauth_signature_method"
OAUTH_CONSUMER_KEY = "oauth_consumer_key"
OAUTH_TOKEN = "oauth_token"
ACCESSOR_SECRET = "oauth_accessor_secret"

_AUTH_PARAM = re.compile(r'\s*([^\s=,]+)\s*=\s*"([^"]*)"\s*')


class Parameter(NamedTuple):
    """A single request parameter; names may repeat within a message."""

    name: str
    value: str | None = None


def to_parameters(pairs: Iterable[tuple[Any, Any]] | Mapping[str, Any] | None) -> list[Parameter]:
    """Convert a mapping or an iterable of pairs into parameters."""
    if pairs is None:
        return []
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    return [Parameter(name, value) for name, value in items]


@dataclass
class OAuthConsumer:
    """
    A consumer and the secrets known for it.

    ``properties`` carries optional extras such as the accessor secret.
    """

    consumer_key: str
    consumer_secret: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    def get_property(self, name: str) -> Any:
        return self.properties.get(name)

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = value


@dataclass
class OAuthMessage:
    """An HTTP request as seen by the signature algorithms."""

    method: str
    url: str
    parameters: list[Parameter] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.parameters = to_parameters(self.parameters)

    def add_parameter(self, name: str, value: str | None) -> None:
        self.parameters.append(Parameter(name, value))

    def add_parameters(self, pairs: Iterable[tuple[Any, Any]] | Mapping[str, Any]) -> None:
        self.parameters.extend(to_parameters(pairs))

    def get_parameter(self, name: str) -> str | None:
        """Return the first value of ``name``, or None when absent."""
        for parameter in self.parameters:
            if parameter.name == name:
                return None if parameter.value is None else str(parameter.value)
        return None

    def require_parameters(self, *names: str) -> None:
        """
        Check that every named parameter is present.

        Raises:
            OAuthProblemError: ``parameter_absent`` listing the missing names
        """
        present = {parameter.name for parameter in self.parameters}
        absent = [name for name in names if name not in present]
        if absent:
            raise OAuthProblemError(
                ProblemCode.PARAMETER_ABSENT,
                f"Missing OAuth parameters: {', '.join(absent)}",
                oauth_parameters_absent="&".join(percent_encode(name) for name in absent),
            )

    @property
    def signature(self) -> str | None:
        return self.get_parameter(OAUTH_SIGNATURE)

    @property
    def signature_method(self) -> str | None:
        return self.get_parameter(OAUTH_SIGNATURE_METHOD)

    @property
    def consumer_key(self) -> str | None:
        return self.get_parameter(OAUTH_CONSUMER_KEY)

    @property
    def token(self) -> str | None:
        return self.get_parameter(OAUTH_TOKEN)

    def to_authorization_header(self, realm: str | None = None) -> str:
        """Render the ``oauth_`` parameters as an ``Authorization: OAuth`` value."""
        parts: list[str] = []
        if realm is not None:
            parts.append(f'realm="{percent_encode(realm)}"')
        for name, value in self.parameters:
            if name.startswith("oauth_"):
                parts.append(f'{percent_encode(name)}="{percent_encode(value)}"')
        return "OAuth " + ", ".join(parts)


def parse_authorization_header(header: str | None) -> list[Parameter]:
    """
    Parse an ``Authorization: OAuth ...`` header into parameters.

    The ``realm`` entry is not a signed parameter and is dropped. Headers
    using another scheme yield no parameters.
    """
    if not header:
        return []
    scheme, _, rest = header.strip().partition(" ")
    if scheme.lower() != "oauth":
        return []
    parameters: list[Parameter] = []
    for item in rest.split(","):
        if not item.strip():
            continue
        match = _AUTH_PARAM.fullmatch(item)
        if match is None:
            raise ValueError(f"Malformed OAuth authorization parameter: {item.strip()!r}")
        name = percent_decode(match.group(1))
        if name.lower() == "realm":
            continue
        parameters.append(Parameter(name, percent_decode(match.group(2))))
    return parameters
