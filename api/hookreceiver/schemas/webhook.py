from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class HandlerContext:
    """A verified WebHook delivery, handed to downstream handlers."""

    receiver: str
    receiver_id: str
    actions: tuple[str, ...]
    data: Any


@dataclass(frozen=True)
class Accepted:
    context: HandlerContext


@dataclass(frozen=True)
class Echoed:
    """Successful verification handshake; the echo goes back verbatim."""

    echo: str
    status_code: int = 200


@dataclass(frozen=True)
class Rejected:
    reason: str
    status_code: int = 400


ReceiveOutcome = Union[Accepted, Echoed, Rejected]
