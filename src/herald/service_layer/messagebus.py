"""Message bus implementation for handling commands and queries."""

import logging
from collections.abc import Callable
from typing import Any

from herald.domain.errors import HeraldError
from herald.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command
from .queries import Query

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods

type Message = Command | Query


class NoHandlerForMessage(LookupError):
    """Exception raised when no handler is registered for a message type."""

    def __init__(self, message: Message) -> None:
        super().__init__(f"No handler found for message {type(message).__name__}")


class MessageBus:
    """A simple message bus for handling commands and queries.

    Routes each message to the handler registered for its type and returns the
    handler's result (the created/updated record, a count, or a list for
    queries). Errors are logged (expected HERALD errors at INFO, anything else
    with a traceback) and re-raised unchanged.

    Args:
        uow: The unit of work injected into the handlers, also exposed here for
            convenience.
        command_handlers: A mapping of command types to handlers. Handlers accept a
            single message argument; other dependencies are bound by the bootstrap.
        query_handlers: A mapping of query types to handlers.

    Note:
        Dispatch is synchronous. The message bus is the main entrypoint to the
        service layer.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: dict[type[Command], Callable[..., Any]],
        query_handlers: dict[type[Query], Callable[..., Any]] | None = None,
    ) -> None:
        self.uow = uow
        self._command_handlers = command_handlers
        self._query_handlers = query_handlers or {}

    def handle(self, message: Message) -> Any:
        """Dispatch a message to its handler and return the handler's result.

        Raises:
            NoHandlerForMessage: If no handler is registered for the message type.
            Exception: Whatever the handler raises.
        """
        if isinstance(message, Query):
            handler = self._query_handlers.get(type(message))
        else:
            handler = self._command_handlers.get(type(message))

        if handler is None:
            logger.error("No handler found for message %s", type(message).__name__)
            raise NoHandlerForMessage(message)

        handler_name = self._get_handler_name(handler)
        logger.debug(
            "Handling %s with handler %s", type(message).__name__, handler_name
        )
        try:
            return handler(message)
        except HeraldError as e:
            logger.info(
                "%s rejected by %s: %s", type(message).__name__, handler_name, e
            )
            raise
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Exception handling %s with handler %s",
                type(message).__name__,
                handler_name,
            )
            raise

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
