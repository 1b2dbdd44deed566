"""Authentication module."""

from newtube.auth.dependencies import (
    ActorContext,
    PublicContext,
    RequestContext,
    get_actor_context,
    get_request_context,
)

__all__ = [
    "ActorContext",
    "PublicContext",
    "RequestContext",
    "get_actor_context",
    "get_request_context",
]
