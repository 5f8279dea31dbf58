from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type


Handler = Callable[[object], None]

logger = logging.getLogger(__name__)


class EventBus:
    """Synchronous publisher for campaign events.

    Typed handlers run before catch-all ones, each group in subscription
    order. A failing handler is logged and skipped so it can never interrupt
    a duel; ``publish`` hands the failures back to the caller.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[Type[object], List[Handler]] = defaultdict(list)
        self._catch_all: List[Handler] = []

    def subscribe(self, event_type: Type[object], handler: Handler) -> None:
        self._subscribers[event_type].append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        self._catch_all.append(handler)

    def handlers_for(self, event: object) -> List[Handler]:
        return [*self._subscribers.get(type(event), ()), *self._catch_all]

    def publish(self, event: object) -> List[Exception]:
        failures: List[Exception] = []
        for handler in self.handlers_for(event):
            try:
                handler(event)
            except Exception as exc:
                failures.append(exc)
                logger.exception(
                    "Event handler failed and was isolated",
                    extra={"event_type": type(event).__name__, "handler": getattr(handler, "__qualname__", repr(handler))},
                )
        return failures


def log_event(event: object) -> None:
    logging.getLogger("duel.events").info("%s %s", type(event).__name__, vars(event))
