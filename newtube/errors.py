"""RPC error taxonomy.

Every procedure failure surfaces as one of these kinds. The API layer
serializes them as ``{"error": {"code": ..., "message": ...}}`` with the
matching HTTP status.
"""

import enum


class ErrorCode(str, enum.Enum):
    """Error kinds exposed to RPC clients."""

    UNAUTHORIZED = "UNAUTHORIZED"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class RPCError(Exception):
    """Base class for errors returned by procedures."""

    code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR
    status_code: int = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": {"code": self.code.value, "message": self.message}}


class Unauthorized(RPCError):
    code = ErrorCode.UNAUTHORIZED
    status_code = 401
    default_message = "Not authenticated"


class TooManyRequests(RPCError):
    code = ErrorCode.TOO_MANY_REQUESTS
    status_code = 429
    default_message = "Too many requests"


class BadRequest(RPCError):
    code = ErrorCode.BAD_REQUEST
    status_code = 400
    default_message = "Bad request"


class NotFound(RPCError):
    """Target row is absent or owned by another actor.

    Both cases share this error so callers cannot probe for rows they do
    not own.
    """

    code = ErrorCode.NOT_FOUND
    status_code = 404
    default_message = "Not found"


class InternalError(RPCError):
    code = ErrorCode.INTERNAL_SERVER_ERROR
    status_code = 500


class UpstreamServiceError(Exception):
    """An external collaborator (media pipeline, storage, workflows) failed."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(f"{service}: {message}")
