"""
StashIt — Logging Plugin

Logs every completed cache operation from its post<Op> hook. Handlers
return the args bag unchanged.
"""

import logging
from typing import Any

from ..cache.hooks import Args, Hook, Operation
from ..cache.plugins import Plugin
from ..observability.logging import get_trace_id

_RESULT_FIELDS = {
    Operation.BUILD_KEY: "key",
    Operation.GET_ITEM: "item",
    Operation.GET_EXTRA: "extra",
    Operation.SET_ITEM: "item",
    Operation.ADD_EXTRA: "extra",
    Operation.SET_EXTRA: "extra",
    Operation.HAS_ITEM: "result",
    Operation.REMOVE_ITEM: "result",
    Operation.CLEAR: "result",
}


def _outcome(operation: Operation, args: Args) -> Any:
    value = args.get(_RESULT_FIELDS[operation])
    if operation in (Operation.GET_ITEM, Operation.GET_EXTRA):
        return "hit" if value is not None else "miss"
    if operation in (Operation.ADD_EXTRA, Operation.SET_EXTRA):
        return "updated" if value is not None else "absent"
    if operation == Operation.SET_ITEM:
        return "stored"
    return value


def create_logging_plugin(
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
    operations: tuple[Operation, ...] = tuple(Operation),
) -> Plugin:
    """
    Build a plugin logging each operation.

    Args:
        logger: Logger to write to (defaults to this module's logger)
        level: Log level for the records
        operations: Operations to log

    Returns:
        Plugin mapping with post hooks only
    """
    log = logger or logging.getLogger(__name__)

    def make_handler(operation: Operation) -> Any:
        def handler(args: Args) -> Args:
            if log.isEnabledFor(level):
                outcome = _outcome(operation, args)
                if operation == Operation.CLEAR:
                    message, params = "%s -> %s", (operation.value, outcome)
                else:
                    message, params = "%s '%s' -> %s", (operation.value, args.get("key"), outcome)
                log.log(
                    level,
                    message,
                    *params,
                    extra={"operation": operation.value, "key": args.get("key"), "trace_id": get_trace_id()},
                )
            return args

        return handler

    hooks: list[Hook] = [{"event": op.post_event, "handler": make_handler(op)} for op in operations]
    return {"hooks": hooks}
