"""Shared error helpers and OAuth problem codes."""

from __future__ import annotations

from typing import Any

from starlette.responses import JSONResponse


class ProblemCode:
    SIGNATURE_METHOD_REJECTED = "signature_method_rejected"
    SIGNATURE_INVALID = "signature_invalid"
    PARAMETER_ABSENT = "parameter_absent"
    PARAMETER_REJECTED = "parameter_rejected"
    CONSUMER_KEY_UNKNOWN = "consumer_key_unknown"


class OAuthProblemError(Exception):
    """
    An OAuth protocol problem.

    The ``problem`` attribute carries the problem code reported to the
    peer; ``parameters`` holds any extra report fields, e.g.
    ``oauth_acceptable_signature_methods`` or ``oauth_parameters_absent``.
    """

    def __init__(self, problem: str, message: str | None = None, **parameters: Any) -> None:
        super().__init__(message or problem)
        self.problem = problem
        self.message = message or problem
        self.parameters: dict[str, Any] = dict(parameters)

    def to_dict(self) -> dict[str, Any]:
        return {"oauth_problem": self.problem, **self.parameters}


def error_response(
    error: OAuthProblemError,
    status_code: int,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    payload: dict[str, Any] = {
        "error": {
            "code": error.problem,
            "message": error.message,
        }
    }
    if error.parameters:
        payload["error"]["details"] = error.parameters
    return JSONResponse(payload, status_code=status_code, headers=headers)
