"""Common utilities for oauthsig."""

from oauthsig.common.encoding import form_encode, percent_encode
from oauthsig.common.errors import OAuthProblemError, ProblemCode
from oauthsig.common.settings import Settings, get_settings

__all__ = [
    "OAuthProblemError",
    "ProblemCode",
    "Settings",
    "get_settings",
    "form_encode",
    "percent_encode",
]
