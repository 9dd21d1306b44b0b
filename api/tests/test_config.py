"""Tests for settings loading."""

from hookreceiver.config import ReceiverOptions, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("WEBHOOK_SECRET_CUSTOM", raising=False)
    monkeypatch.delenv("DISABLE_HTTPS_CHECK", raising=False)
    s = Settings(_env_file=None)
    assert s.webhook_secret_custom == ""
    assert s.disable_https_check is False
    assert s.max_body_size == 2 * 1024 * 1024


def test_secret_read_from_environment(monkeypatch):
    monkeypatch.setenv("WEBHOOK_SECRET_CUSTOM", "secret0, id1=secret1")
    s = Settings(_env_file=None)
    assert s.receiver_secrets() == {"custom": "secret0, id1=secret1"}


def test_https_check_flag_from_environment(monkeypatch):
    monkeypatch.setenv("DISABLE_HTTPS_CHECK", "true")
    assert Settings(_env_file=None).disable_https_check is True


def test_receiver_option_defaults():
    options = ReceiverOptions()
    assert options.receiver_name == "custom"
    assert options.signature_algorithm == "sha256"
    assert options.signature_header == "ms-signature"
    assert options.echo_parameter == "echo"
    assert (options.secret_min_length, options.secret_max_length) == (32, 128)
