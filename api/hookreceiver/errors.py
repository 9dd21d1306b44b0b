"""Exception hierarchy for HookReceiver.

Request-level rejections are never raised; they are returned as
``Rejected`` outcomes (see ``hookreceiver.schemas.webhook``). The exceptions
below signal configuration problems or defects in the calling code.
"""


class ReceiverError(Exception):
    """Base for all receiver exceptions."""


class ConfigurationError(ReceiverError):
    """Receiver settings are missing or invalid."""


class InvalidPayloadError(ReceiverError):
    """A payload was handed to the action extractor without being parsed."""
