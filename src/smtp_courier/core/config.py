# =============================================================================
# Client Configuration
# =============================================================================
# Connection details for a single SMTP server. Values arrive already
# resolved from the caller; this module never reads files or the keyring.
#
# Security negotiation is decided from two inputs:
#   - The port: 465 means implicit TLS (TLS from the very first byte)
#   - The TLSPolicy: what to do when a plaintext server lacks STARTTLS
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum

# Well-known SMTPS submission port (RFC 8314)
IMPLICIT_TLS_PORT = 465


class TLSPolicy(Enum):
    """
    How to react when a plaintext server doesn't advertise STARTTLS.

    Values:
        STRICT: Abort before authenticating. This is the default.
        OPPORTUNISTIC: Authenticate over the unencrypted connection anyway.
                       Credentials travel in the clear, so only use this for
                       legacy relays on a trusted network.
    """
    STRICT = "strict"
    OPPORTUNISTIC = "opportunistic"


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection parameters for an SMTP client.

    Attributes:
        host: Hostname or IP address of the SMTP server.
        port: Server port as a string (e.g. "25", "465", "587").
              Integers are accepted and converted.
        secret: Password or token used for AUTH PLAIN. Never shown in repr.
        security: TLS policy for non-implicit-TLS ports.
        timeout: Seconds allowed for connecting and for each SMTP command.
        validate_certs: Whether to verify the server's TLS certificate.
        local_hostname: Name sent with EHLO/HELO. None lets aiosmtplib
                        pick the local FQDN.

    Example:
        >>> config = ClientConfig("smtp.example.com", "587", "hunter2")
        >>> config.uses_implicit_tls
        False
    """

    host: str
    port: str
    secret: str = field(repr=False)
    security: TLSPolicy = TLSPolicy.STRICT
    timeout: float = 30.0
    validate_certs: bool = True
    local_hostname: str | None = None

    def __post_init__(self) -> None:
        # Frozen dataclass, so normalise through object.__setattr__
        port = str(self.port).strip()
        if port.isdigit():
            # "0465" and "465" name the same port
            port = str(int(port))
        object.__setattr__(self, "port", port)
        object.__setattr__(self, "security", TLSPolicy(self.security))

    @property
    def port_number(self) -> int:
        """
        The port as an integer.

        Raises:
            ValueError: If the port isn't a number in the 1-65535 range.
        """
        number = int(self.port)
        if not 0 < number < 65536:
            raise ValueError(f"Port out of range: {self.port}")
        return number

    @property
    def uses_implicit_tls(self) -> bool:
        """True if the port is the SMTPS port (TLS before any SMTP traffic)."""
        try:
            return self.port_number == IMPLICIT_TLS_PORT
        except ValueError:
            return False

    @property
    def address(self) -> str:
        """host:port, as used in log and error messages."""
        return f"{self.host}:{self.port}"
