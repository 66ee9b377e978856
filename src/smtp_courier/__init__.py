# =============================================================================
# smtp-courier: A Small Async SMTP Sending Library
# =============================================================================
#
# Compose a plain-text email with attachments and hand it to an SMTP server,
# with TLS sorted out before any password leaves the machine.
#
# Features:
#   - multipart/mixed MIME composition with collision-free boundaries
#   - Implicit TLS (port 465) or STARTTLS, strict by default
#   - AUTH PLAIN, one connection per call, always closed afterwards
#   - Typed errors for each stage (compose, connect, TLS, auth, send)
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "smtp-courier"

from smtp_courier.core import ClientConfig, OutboundMessage, TLSPolicy
from smtp_courier.smtp import (
    CompositionError,
    SendError,
    SMTPAuthenticationError,
    SMTPClient,
    SMTPConnectionError,
    SMTPError,
    SMTPTLSError,
    compose,
    create_client,
)

__all__ = [
    "__version__",
    "__app_name__",
    "ClientConfig",
    "OutboundMessage",
    "TLSPolicy",
    "SMTPClient",
    "create_client",
    "compose",
    "SMTPError",
    "CompositionError",
    "SMTPConnectionError",
    "SMTPTLSError",
    "SMTPAuthenticationError",
    "SendError",
]
