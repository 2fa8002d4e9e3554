"""Basic unit tests for the opencode-relay package."""

from opencode_relay import (
    AsyncOpenCode,
    OpenCode,
    OpenCodeError,
    ConnectionError,
    TransportError,
    SessionError,
    SessionNotFoundError,
    SessionCreationError,
    Config,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert OpenCode is not None
    assert AsyncOpenCode is not None


def test_error_hierarchy():
    assert issubclass(ConnectionError, OpenCodeError)
    assert issubclass(TransportError, OpenCodeError)
    assert issubclass(SessionError, OpenCodeError)
    assert issubclass(SessionNotFoundError, SessionError)
    assert issubclass(SessionCreationError, SessionError)


def test_error_attributes():
    err = OpenCodeError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    missing = SessionNotFoundError("ses_abc123")
    assert missing.code == "session_not_found"
    assert missing.session_id == "ses_abc123"
    assert "ses_abc123" in str(missing)

    assert ConnectionError("down").code == "connection_refused"
    assert SessionCreationError().code == "session_create_failed"


def test_config_defaults():
    cfg = Config()
    assert cfg.host == "127.0.0.1"
    assert cfg.port == 4096
    assert cfg.provider == "myprovider"
    assert cfg.model == "GPT-4o"
    assert cfg.timeout is None
    assert str(cfg.endpoint) == "127.0.0.1:4096"
