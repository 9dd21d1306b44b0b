"""Resolve the shared secret for a receiver and receiver id."""

import logging
from typing import Mapping, Optional

from hookreceiver.config import ReceiverOptions
from hookreceiver.errors import ConfigurationError

logger = logging.getLogger(__name__)


def parse_secrets(
    config: str,
    min_length: int = 32,
    max_length: int = 128,
) -> dict[str, bytes]:
    """
    Parse a secret configuration string into ``{receiver_id: secret}``.

    Format: ``"secret0, id1=secret1,id2=secret2"``. A bare entry is the
    default secret (empty id). Ids are case-insensitive. Each secret must be
    between ``min_length`` and ``max_length`` bytes once UTF-8 encoded.
    """
    secrets: dict[str, bytes] = {}
    for entry in config.split(","):
        entry = entry.strip()
        if not entry:
            continue

        receiver_id, sep, secret = entry.partition("=")
        if not sep:
            receiver_id, secret = "", entry
        receiver_id = receiver_id.strip().lower()
        value = secret.strip().encode("utf-8")

        if not min_length <= len(value) <= max_length:
            raise ConfigurationError(
                f"Secret for receiver id '{receiver_id}' must be between "
                f"{min_length} and {max_length} bytes long"
            )
        if receiver_id in secrets:
            raise ConfigurationError(f"Duplicate secret for receiver id '{receiver_id}'")
        secrets[receiver_id] = value
    return secrets


class SecretResolver:
    """Read-only lookup of shared secrets, keyed by receiver name and id."""

    def __init__(self, secrets: Mapping[str, Mapping[str, bytes]]):
        self._secrets = {name.lower(): dict(ids) for name, ids in secrets.items()}

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, str],
        options: ReceiverOptions = ReceiverOptions(),
    ) -> "SecretResolver":
        secrets = {
            name: parse_secrets(value, options.secret_min_length, options.secret_max_length)
            for name, value in config.items()
        }
        for name, ids in secrets.items():
            logger.info("Loaded %d secret(s) for receiver '%s'", len(ids), name)
        return cls(secrets)

    def resolve(self, receiver_name: str, receiver_id: str = "") -> Optional[bytes]:
        """
        Return the secret for ``receiver_id`` under ``receiver_name``.

        An empty id selects the default secret. Returns None when nothing is
        configured; callers reject the request.
        """
        ids = self._secrets.get(receiver_name.lower())
        if not ids:
            return None
        return ids.get(receiver_id.lower())
