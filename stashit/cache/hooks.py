"""
StashIt — Hook Emitter

Ordered, asynchronous chain of handlers per event. Each handler receives
the args bag returned by the previous one; handler n+1 never starts before
handler n has fully resolved.

Event names are derived from the closed Operation enum:

    Operation.GET_ITEM.pre_event   -> "preGetItem"
    Operation.SET_EXTRA.post_event -> "postSetExtra"

Handlers may be plain functions or coroutine functions.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypedDict

from ..errors import ValidationError

logger = logging.getLogger(__name__)

Args = dict[str, Any]
Handler = Callable[[Args], Args | Awaitable[Args]]

EVENT_PREFIXES = ("pre", "post")


class Operation(str, Enum):
    """Cache operations that emit pre/post events."""

    BUILD_KEY = "buildKey"
    GET_ITEM = "getItem"
    GET_EXTRA = "getExtra"
    SET_ITEM = "setItem"
    ADD_EXTRA = "addExtra"
    SET_EXTRA = "setExtra"
    HAS_ITEM = "hasItem"
    REMOVE_ITEM = "removeItem"
    CLEAR = "clear"

    @property
    def pre_event(self) -> str:
        return f"pre{self.value[0].upper()}{self.value[1:]}"

    @property
    def post_event(self) -> str:
        return f"post{self.value[0].upper()}{self.value[1:]}"


class Hook(TypedDict):
    """A handler registered against a pre/post event."""

    event: str
    handler: Handler


async def resolve(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it as-is."""
    if inspect.isawaitable(value):
        return await value
    return value


def validate_hook(hook: Any) -> None:
    """
    Validate a hook mapping.

    Raises:
        ValidationError: If event is not a string, lacks the pre/post
            prefix, or handler is not callable
    """
    if not isinstance(hook, dict):
        raise ValidationError("Hook's event must be a string.", details={"hook_type": type(hook).__name__})

    event = hook.get("event")
    if not isinstance(event, str):
        raise ValidationError("Hook's event must be a string.", details={"event_type": type(event).__name__})

    if not event.startswith(EVENT_PREFIXES):
        raise ValidationError("Hook's event must start with 'pre' or 'post'.", details={"event": event})

    if not callable(hook.get("handler")):
        raise ValidationError("Hook's handler must be a function.", details={"event": event})


def validate_args(args: Any) -> None:
    """Ensure args is a plain mapping carrying a cache instance."""
    if not isinstance(args, dict):
        raise ValidationError("'args' must be an object.", details={"type": type(args).__name__})

    if not args.get("cacheInstance"):
        raise ValidationError("'args' must contain 'cacheInstance' property.")


async def emit(event: str, args: Args) -> Args:
    """
    Pass args through every handler registered for event, in order.

    The hook table is read from args["cacheInstance"]. When nothing is
    registered for event, the very same args object is returned.

    Args:
        event: Event name, e.g. "preGetItem"
        args: Args bag; must contain "cacheInstance"

    Returns:
        Args bag as rewritten by the last handler

    Raises:
        ValidationError: If args is malformed
    """
    validate_args(args)

    handlers = args["cacheInstance"].get_hooks().get(event)
    if not handlers:
        return args

    logger.debug(
        "Emitting '%s' through %d handler(s)",
        event,
        len(handlers),
        extra={"event": event, "handler_count": len(handlers)},
    )

    data = args
    for handler in handlers:
        data = await resolve(handler(data))

    return data
