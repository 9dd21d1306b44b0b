"""WebHook receiver implementations."""

from hookreceiver.receivers.base import WebHookReceiver
from hookreceiver.receivers.custom import CustomWebHookReceiver, get_actions
from hookreceiver.receivers.resolver import SecretResolver, parse_secrets

__all__ = [
    "WebHookReceiver",
    "CustomWebHookReceiver",
    "SecretResolver",
    "get_actions",
    "parse_secrets",
]
