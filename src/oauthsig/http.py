"""Starlette integration: OAuth messages from requests and a verifying middleware."""

from __future__ import annotations

from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from oauthsig.common.encoding import decode_form
from oauthsig.common.errors import OAuthProblemError, ProblemCode, error_response
from oauthsig.common.logging import get_logger
from oauthsig.common.settings import Settings, get_settings
from oauthsig.message import (
    OAUTH_CONSUMER_KEY,
    OAUTH_SIGNATURE,
    OAUTH_SIGNATURE_METHOD,
    OAuthConsumer,
    OAuthMessage,
    parse_authorization_header,
)
from oauthsig.signature.registry import SignatureMethodRegistry, new_method

logger = get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

ConsumerLookup = Callable[[str], OAuthConsumer | None]
TokenSecretLookup = Callable[[str, str], str | None]


async def message_from_request(request: Request) -> OAuthMessage:
    """
    Collect the signed parameters of a request into an OAuthMessage.

    Parameters come from the query string, a form-encoded body and the
    ``Authorization: OAuth`` header. The URL excludes the query.
    """
    url = str(request.url.replace(query="", fragment=""))
    message = OAuthMessage(method=request.method, url=url)
    message.add_parameters(decode_form(request.url.query))

    content_type = request.headers.get("content-type", "")
    if content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE:
        body = await request.body()
        message.add_parameters(decode_form(body.decode("utf-8")))

    message.add_parameters(parse_authorization_header(request.headers.get("authorization")))
    return message


class OAuthSignatureMiddleware(BaseHTTPMiddleware):
    """Reject requests whose OAuth signature does not verify."""

    def __init__(
        self,
        app: ASGIApp,
        lookup_consumer: ConsumerLookup,
        lookup_token_secret: TokenSecretLookup | None = None,
        registry: SignatureMethodRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(app)
        self._lookup_consumer = lookup_consumer
        self._lookup_token_secret = lookup_token_secret
        self._registry = registry
        self._settings = settings or get_settings()
        self._exempt_paths = set(self._settings.verify_exempt_paths)

    def _challenge(self) -> dict[str, str]:
        realm = self._settings.realm
        if not realm:
            return {"WWW-Authenticate": "OAuth"}
        quoted = realm.replace("\\", "\\\\").replace('"', '\\"')
        return {"WWW-Authenticate": f'OAuth realm="{quoted}"'}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self._exempt_paths:
            return await call_next(request)

        try:
            message = await message_from_request(request)
        except ValueError as exc:
            logger.warning("Malformed OAuth request", error=str(exc))
            problem = OAuthProblemError(ProblemCode.PARAMETER_REJECTED, str(exc))
            return error_response(problem, 400, headers=self._challenge())

        try:
            message.require_parameters(OAUTH_CONSUMER_KEY, OAUTH_SIGNATURE_METHOD, OAUTH_SIGNATURE)
            consumer_key = message.consumer_key or ""
            consumer = self._lookup_consumer(consumer_key)
            if consumer is None:
                raise OAuthProblemError(
                    ProblemCode.CONSUMER_KEY_UNKNOWN,
                    f"Unknown consumer: {consumer_key}",
                )
            token_secret = None
            token = message.token
            if token and self._lookup_token_secret is not None:
                token_secret = self._lookup_token_secret(consumer_key, token)
            method = new_method(message.signature_method, consumer, token_secret, self._registry)
            if not method.verify(message):
                raise OAuthProblemError(ProblemCode.SIGNATURE_INVALID, "Invalid OAuth signature")
        except OAuthProblemError as exc:
            status_code = 400 if exc.problem == ProblemCode.SIGNATURE_METHOD_REJECTED else 401
            logger.warning(
                "OAuth verification failed",
                problem=exc.problem,
                path=request.url.path,
                consumer_key=message.consumer_key,
            )
            return error_response(exc, status_code, headers=self._challenge())

        request.state.oauth_consumer_key = consumer_key
        return await call_next(request)
