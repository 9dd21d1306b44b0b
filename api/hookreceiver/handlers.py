"""Hand verified WebHook deliveries to the host's handlers."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional

from hookreceiver.schemas.webhook import HandlerContext

logger = logging.getLogger(__name__)

Handler = Callable[[HandlerContext], Awaitable[None]]


@dataclass
class _Registration:
    func: Handler
    receiver: Optional[str]
    actions: Optional[frozenset[str]] = None

    def matches(self, context: HandlerContext) -> bool:
        if self.receiver is not None and self.receiver.lower() != context.receiver.lower():
            return False
        return self.actions is None or not self.actions.isdisjoint(context.actions)


class HandlerRegistry:
    """
    Ordered list of async handlers.

    A handler registered with ``receiver=None`` sees deliveries from every
    receiver; with ``actions=None`` it sees every delivery, otherwise only
    those carrying at least one of its actions. Handlers run one after
    another in registration order.
    """

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []

    def __len__(self) -> int:
        return len(self._registrations)

    def add(
        self,
        func: Handler,
        receiver: Optional[str] = None,
        actions: Optional[Iterable[str]] = None,
    ) -> None:
        if isinstance(actions, str):
            actions = [actions]
        self._registrations.append(
            _Registration(
                func=func,
                receiver=receiver,
                actions=frozenset(actions) if actions is not None else None,
            )
        )

    def handler(self, receiver: Optional[str] = None, actions: Optional[Iterable[str]] = None):
        def decorator(func: Handler) -> Handler:
            self.add(func, receiver=receiver, actions=actions)
            return func

        return decorator

    async def dispatch(self, context: HandlerContext) -> int:
        """
        Await every matching handler with ``context``.

        A failing handler is logged and does not stop the ones after it.
        Returns the number of handlers that completed.
        """
        completed = 0
        for registration in self._registrations:
            if not registration.matches(context):
                continue
            try:
                await registration.func(context)
                completed += 1
            except Exception:
                logger.exception(
                    "Handler %s failed for receiver %r id %r",
                    getattr(registration.func, "__name__", registration.func),
                    context.receiver,
                    context.receiver_id,
                )
        return completed


registry = HandlerRegistry()
