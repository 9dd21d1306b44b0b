"""
Receiver for WebHooks signed with an HMAC-SHA256 ``ms-signature`` header.

Secrets are read from the ``WEBHOOK_SECRET_CUSTOM`` setting, optionally keyed
by id to tell several subscribers apart, e.g. ``secret0, id1=secret1,id2=secret2``.
The WebHook URI is ``https://<host>/api/webhooks/incoming/custom/{id}``.
"""

import json
import logging
from typing import Any, Optional

from fastapi import Request

from hookreceiver.config import ReceiverOptions
from hookreceiver.errors import InvalidPayloadError
from hookreceiver.receivers.base import WebHookReceiver
from hookreceiver.receivers.resolver import SecretResolver
from hookreceiver.schemas.webhook import (
    Accepted,
    Echoed,
    HandlerContext,
    ReceiveOutcome,
    Rejected,
)
from hookreceiver.security import compute_hash, from_hex, secret_equal

logger = logging.getLogger(__name__)

NOTIFICATIONS_KEY = "Notifications"
ACTION_KEY = "Action"

INVALID_REQUEST = "Invalid WebHook Request"
INVALID_SIGNATURE = "Invalid Signature"
BAD_ENCODING = "Bad Encoding"
BAD_SIGNATURE = "Bad Signature"
NO_SECRET = "Invalid Request"
NO_ECHO = "No Echo Provided"
NOT_A_JSON_OBJECT = "The WebHook request must contain an entity body formatted as a JSON object."


def get_actions(data: Any) -> list[str]:
    """
    Collect the event actions from a parsed notification payload.

    Actions are read from ``Notifications[*].Action`` in array order.
    A missing or non-array ``Notifications`` yields an empty list; entries
    that are not objects or carry no string ``Action`` are skipped.
    """
    if data is None:
        raise InvalidPayloadError("Cannot extract actions from a missing payload")

    if not isinstance(data, dict):
        return []
    notifications = data.get(NOTIFICATIONS_KEY)
    if not isinstance(notifications, list):
        return []

    actions = []
    for notification in notifications:
        if not isinstance(notification, dict):
            continue
        action = notification.get(ACTION_KEY)
        if isinstance(action, str):
            actions.append(action)
    return actions


class CustomWebHookReceiver(WebHookReceiver):
    def __init__(self, resolver: SecretResolver, options: Optional[ReceiverOptions] = None):
        self._resolver = resolver
        self._options = options or ReceiverOptions()

    @property
    def name(self) -> str:
        return self._options.receiver_name

    @property
    def options(self) -> ReceiverOptions:
        return self._options

    async def receive(self, receiver_id: str, request: Request) -> ReceiveOutcome:
        if receiver_id is None:
            raise ValueError("receiver_id is required")
        if request is None:
            raise ValueError("request is required")

        if request.method == "POST":
            # Read once: the signature covers the exact bytes on the wire
            body = await request.body()
            header = request.headers.get(self._options.signature_header)

            rejection = self.check_signature(receiver_id, body, header)
            if rejection:
                return rejection

            try:
                data = json.loads(body)
            except (ValueError, RecursionError):
                logger.warning("Receiver %r id %r: body is not valid JSON", self.name, receiver_id)
                return Rejected(NOT_A_JSON_OBJECT)
            if not isinstance(data, dict):
                logger.warning("Receiver %r id %r: body is not a JSON object", self.name, receiver_id)
                return Rejected(NOT_A_JSON_OBJECT)

            context = HandlerContext(
                receiver=self.name,
                receiver_id=receiver_id,
                actions=tuple(get_actions(data)),
                data=data,
            )
            return Accepted(context)

        if request.method == "GET":
            echo = request.query_params.get(self._options.echo_parameter)
            return self.verification(receiver_id, echo)

        logger.info(
            "Receiver %r id %r: unsupported method %r", self.name, receiver_id, request.method
        )
        return Rejected(INVALID_REQUEST)

    def check_signature(
        self,
        receiver_id: str,
        body: bytes,
        header: Optional[str],
    ) -> Optional[Rejected]:
        """
        Verify the signature header against the HMAC of ``body``.

        Returns None when the request is authentic, otherwise the rejection
        to send back.
        """
        values = (header or "").split("=")
        if len(values) != 2 or values[0].lower() != self._options.signature_algorithm.lower():
            logger.info(
                "Receiver %r id %r: malformed %s header",
                self.name,
                receiver_id,
                self._options.signature_header,
            )
            return Rejected(INVALID_SIGNATURE)

        try:
            expected_hash = from_hex(values[1])
        except ValueError:
            logger.info("Receiver %r id %r: signature is not valid hex", self.name, receiver_id)
            return Rejected(BAD_ENCODING)

        secret = self._resolver.resolve(self.name, receiver_id)
        if secret is None:
            logger.error("Receiver %r id %r: no secret configured", self.name, receiver_id)
            return Rejected(BAD_SIGNATURE)

        actual_hash = compute_hash(secret, body, self._options.signature_algorithm)
        if not secret_equal(expected_hash, actual_hash):
            logger.info("Receiver %r id %r: signature mismatch", self.name, receiver_id)
            return Rejected(BAD_SIGNATURE)
        return None

    def verify_signature(self, receiver_id: str, body: bytes, header: Optional[str]) -> bool:
        return self.check_signature(receiver_id, body, header) is None

    def verification(self, receiver_id: str, echo: Optional[str]) -> ReceiveOutcome:
        """Answer the GET handshake a sender issues when registering this URL."""
        if self._resolver.resolve(self.name, receiver_id) is None:
            logger.error(
                "WebHook verification failed for %r id %r - no secret found",
                self.name,
                receiver_id,
            )
            return Rejected(NO_SECRET)

        if not echo:
            logger.error(
                "WebHook verification failed for %r id %r - no echo provided",
                self.name,
                receiver_id,
            )
            return Rejected(NO_ECHO)

        logger.info("WebHook verification succeeded for %r id %r", self.name, receiver_id)
        return Echoed(echo)
