"""
Response envelope helpers shared by the routers.

Success: {"success": true, "data": ...}
Failure: {"success": false, "error": {"message", "code", "details"?}}
"""

from collections.abc import Callable
from typing import Any

from fastapi import Response, status
from fastapi.responses import JSONResponse

from bookreview.errors import INTERNAL_ERROR_CODE, Err, Result, ServiceError


def success_response(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, "data": data})


def error_response(error: ServiceError) -> JSONResponse:
    """Map a typed error to its HTTP status code."""
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.to_dict()},
    )


def internal_error_response(message: str = "Internal server error") -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": {"message": message, "code": INTERNAL_ERROR_CODE},
        },
    )


def respond(
    result: Result,
    serialize: Callable[[Any], Any],
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Turn a service result into a response, serializing Ok values."""
    if isinstance(result, Err):
        return error_response(result.error)
    return success_response(serialize(result.value), status_code)


def respond_no_content(result: Result) -> Response:
    if isinstance(result, Err):
        return error_response(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
