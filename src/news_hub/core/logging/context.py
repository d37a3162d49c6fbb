"""
Request ID propagation for log lines.

The aggregator fans each news request out into one asyncio task per
provider. Tasks copy the current context when they are created, so every
provider log line carries the request ID of the lookup that started it.

    async with RequestContext("req-abc-123"):
        articles = await news_service.search_news("election")
"""

import uuid
from contextvars import ContextVar, Token
from typing import Optional

_current_request: ContextVar[Optional[str]] = ContextVar("news_hub_request_id", default=None)

REQUEST_ID_LENGTH = 8


def new_request_id() -> str:
    return uuid.uuid4().hex[:REQUEST_ID_LENGTH]


def get_request_id() -> Optional[str]:
    return _current_request.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Bind a request ID to the current context without a scope.

    Returns:
        The bound ID; a fresh short ID when none was given
    """
    bound = request_id or new_request_id()
    _current_request.set(bound)
    return bound


def clear_request_id() -> None:
    _current_request.set(None)


class RequestContext:
    """
    Scope a request ID to a block; usable with ``with`` and ``async with``.

    The ID that was bound before entering is restored on exit.
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id
        self._reset_token: Optional[Token] = None

    def __enter__(self) -> "RequestContext":
        self.request_id = self.request_id or new_request_id()
        self._reset_token = _current_request.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self._reset_token is not None:
            _current_request.reset(self._reset_token)
            self._reset_token = None
        return False

    async def __aenter__(self) -> "RequestContext":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        return self.__exit__(exc_type, exc_val, exc_tb)
