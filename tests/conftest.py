# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the smtp-courier test suite.
# =============================================================================

from unittest.mock import AsyncMock, MagicMock

import pytest

from smtp_courier.core import ClientConfig, OutboundMessage, TLSPolicy


@pytest.fixture
def sample_config():
    """A STARTTLS submission-port config with the default strict policy."""
    return ClientConfig(
        host="smtp.example.com",
        port="587",
        secret="s3cret",
    )


@pytest.fixture
def implicit_tls_config():
    """A config pointing at the SMTPS port."""
    return ClientConfig(
        host="smtp.example.com",
        port="465",
        secret="s3cret",
    )


@pytest.fixture
def opportunistic_config():
    """A plaintext relay config that tolerates missing STARTTLS."""
    return ClientConfig(
        host="relay.example.com",
        port="25",
        secret="s3cret",
        security=TLSPolicy.OPPORTUNISTIC,
    )


@pytest.fixture
def sample_message():
    """The two-recipient message with one attachment."""
    return OutboundMessage(
        sender="a@x.com",
        to=["b@y.com", "c@y.com"],
        subject="Hi",
        body="Hello",
        attachments={"r.txt": b"data"},
    )


@pytest.fixture
def smtp_mock():
    """
    Stand-in for an aiosmtplib.SMTP instance.

    Every protocol command is an AsyncMock that succeeds. The server
    advertises STARTTLS; set ``supports_extension.return_value = False``
    to simulate one that doesn't.
    """
    smtp = AsyncMock()
    smtp.supports_extension = MagicMock(return_value=True)
    smtp.close = MagicMock()
    smtp.is_connected = True
    return smtp
