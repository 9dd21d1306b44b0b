"""Base WebHook receiver interface."""

from abc import ABC, abstractmethod

from fastapi import Request

from hookreceiver.schemas.webhook import ReceiveOutcome


class WebHookReceiver(ABC):
    """
    Common interface for all WebHook receivers.
    Each receiver authenticates its sender's requests in its own way and
    normalizes verified deliveries into a HandlerContext.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def receive(self, receiver_id: str, request: Request) -> ReceiveOutcome:
        """Process one inbound request for ``receiver_id``."""
        ...
