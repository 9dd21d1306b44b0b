from dataclasses import dataclass

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "HookReceiver"
    debug: bool = False
    log_level: str = "INFO"

    # CORS: comma-separated allowed origins (empty = allow all for dev)
    cors_origins: str = ""

    # Secrets for the 'custom' receiver: "secret0, id1=secret1,id2=secret2"
    webhook_secret_custom: str = ""

    # Accept plain HTTP deliveries (local development only)
    disable_https_check: bool = False

    # Largest request body accepted, in bytes
    max_body_size: int = 2 * 1024 * 1024

    model_config = {"env_file": ".env", "extra": "ignore"}

    def receiver_secrets(self) -> dict[str, str]:
        """Raw secret configuration keyed by receiver name."""
        return {"custom": self.webhook_secret_custom}


@dataclass(frozen=True)
class ReceiverOptions:
    """Wire-level constants of a signature-verifying receiver."""

    receiver_name: str = "custom"
    signature_algorithm: str = "sha256"
    signature_header: str = "ms-signature"
    echo_parameter: str = "echo"
    secret_min_length: int = 32
    secret_max_length: int = 128


settings = Settings()
