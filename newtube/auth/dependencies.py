"""Request context and authentication dependencies for FastAPI."""

import logging
import uuid
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from newtube.auth.tokens import extract_session_token, verify_session_token
from newtube.db import get_db
from newtube.db.crud import get_user_by_clerk_id
from newtube.errors import TooManyRequests, Unauthorized
from newtube.models import User
from newtube.utils.logging import LogContext, get_logger
from newtube.utils.rate_limiter import rate_limiter

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Everything a procedure knows about who is calling.

    Built once per request and passed explicitly to every procedure.
    """

    request_id: str
    clerk_user_id: str | None = None
    actor: User | None = None

    @property
    def actor_id(self) -> uuid.UUID | None:
        return self.actor.id if self.actor else None

    def log(self, base: logging.Logger = logger) -> LogContext:
        """Logger prefixed with this request's correlation metadata."""
        return LogContext(
            base,
            request_id=self.request_id,
            actor=str(self.actor_id) if self.actor_id else None,
        )


async def get_request_context(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RequestContext:
    """Resolve the caller. Anonymous callers get a context without actor."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex

    clerk_user_id = None
    token = extract_session_token(request)
    if token:
        clerk_user_id = verify_session_token(token)

    actor = await get_user_by_clerk_id(db, clerk_user_id) if clerk_user_id else None
    return RequestContext(request_id=request_id, clerk_user_id=clerk_user_id, actor=actor)


async def get_actor_context(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
) -> RequestContext:
    """Require an authenticated actor and admit it through the rate limiter."""
    if not ctx.clerk_user_id or ctx.actor is None:
        raise Unauthorized()

    result = await rate_limiter.limit(str(ctx.actor.id))
    if not result.success:
        ctx.log().warning("Rate limit exceeded")
        raise TooManyRequests()

    return ctx


PublicContext = Annotated[RequestContext, Depends(get_request_context)]
ActorContext = Annotated[RequestContext, Depends(get_actor_context)]
