"""Tests for the core dataclasses."""

from dataclasses import FrozenInstanceError

import pytest

from smtp_courier.core import IMPLICIT_TLS_PORT, ClientConfig, OutboundMessage, TLSPolicy


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_defaults(self, sample_config):
        assert sample_config.security is TLSPolicy.STRICT
        assert sample_config.timeout == 30.0
        assert sample_config.validate_certs is True
        assert sample_config.local_hostname is None

    def test_integer_port_is_normalised(self):
        config = ClientConfig("smtp.example.com", 587, "pw")
        assert config.port == "587"
        assert config.port_number == 587

    def test_implicit_tls_detection(self, sample_config, implicit_tls_config):
        assert implicit_tls_config.uses_implicit_tls
        assert not sample_config.uses_implicit_tls
        assert implicit_tls_config.port_number == IMPLICIT_TLS_PORT

    def test_zero_padded_implicit_tls_port(self):
        config = ClientConfig("smtp.example.com", "0465", "pw")
        assert config.port == "465"
        assert config.uses_implicit_tls

    def test_non_numeric_port_is_not_implicit_tls(self):
        config = ClientConfig("smtp.example.com", "smtps", "pw")
        assert not config.uses_implicit_tls

    def test_policy_accepts_string_value(self):
        config = ClientConfig("relay", "25", "pw", security="opportunistic")
        assert config.security is TLSPolicy.OPPORTUNISTIC

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValueError):
            ClientConfig("relay", "25", "pw", security="sometimes")

    @pytest.mark.parametrize("port", ["abc", "", "0", "70000"])
    def test_bad_port_number(self, port):
        config = ClientConfig("smtp.example.com", port, "pw")
        with pytest.raises(ValueError):
            config.port_number

    def test_secret_hidden_from_repr(self, sample_config):
        assert "s3cret" not in repr(sample_config)
        assert "smtp.example.com" in repr(sample_config)

    def test_address(self, sample_config):
        assert sample_config.address == "smtp.example.com:587"

    def test_frozen(self, sample_config):
        with pytest.raises(FrozenInstanceError):
            sample_config.host = "other.example.com"


class TestOutboundMessage:
    """Tests for OutboundMessage."""

    def test_recipients_become_tuple(self, sample_message):
        assert sample_message.to == ("b@y.com", "c@y.com")

    def test_single_string_recipient(self):
        msg = OutboundMessage(sender="a@x.com", to="b@y.com")
        assert msg.to == ("b@y.com",)

    def test_attachments_default_empty(self):
        msg = OutboundMessage(sender="a@x.com", to=["b@y.com"])
        assert dict(msg.attachments) == {}
        assert not msg.has_attachments

    def test_attachments_are_read_only(self, sample_message):
        with pytest.raises(TypeError):
            sample_message.attachments["evil.exe"] = b"MZ"

    def test_attachments_copied_from_caller(self):
        files = {"r.txt": b"data"}
        msg = OutboundMessage(sender="a@x.com", to=["b@y.com"], attachments=files)
        files["late.txt"] = b"added after"
        assert list(msg.attachments) == ["r.txt"]

    def test_frozen(self, sample_message):
        with pytest.raises(FrozenInstanceError):
            sample_message.subject = "Changed"

    def test_repr_omits_attachment_bytes(self):
        msg = OutboundMessage(
            sender="a@x.com", to=["b@y.com"], attachments={"big.bin": b"\x00" * 1024}
        )
        assert "big.bin" in repr(msg)
        assert "\\x00" not in repr(msg)
