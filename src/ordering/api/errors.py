"""HTTP rendering of ordering errors.

Every error body has the same shape: ``{"error": <messages dict>}``. Order
transition failures also report the status the order was actually in.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.errors import ConflictError, InvalidStateError, PermissionDeniedError


def _error_body(exc) -> dict:
    messages = getattr(exc, "messages", None)
    return {"error": messages if messages else str(exc)}


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body(exc))


async def _permission_denied(request: Request, exc: PermissionDeniedError) -> JSONResponse:
    return JSONResponse(status_code=403, content=_error_body(exc))


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_body(exc))


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content=_error_body(exc))


async def _invalid_state(request: Request, exc: InvalidStateError) -> JSONResponse:
    body = _error_body(exc)
    if exc.current_status is not None:
        body["current_status"] = exc.current_status
    return JSONResponse(status_code=409, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Map ordering error kinds onto HTTP status codes.

    Call after protean's ``register_exception_handlers`` so these mappings
    take precedence for the exception types both of them know about.
    """
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(PermissionDeniedError, _permission_denied)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(InvalidStateError, _invalid_state)
