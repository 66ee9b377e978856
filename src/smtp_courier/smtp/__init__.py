# =============================================================================
# SMTP Module
# =============================================================================
# Handles sending emails via SMTP (Simple Mail Transfer Protocol).
#
# Features:
#   - MIME composition (plain-text body + binary attachments)
#   - Implicit TLS on port 465, STARTTLS elsewhere
#   - Strict or opportunistic TLS policy
#   - Credential pre-flight checks (validate)
# =============================================================================

from smtp_courier.smtp.client import SMTPClient, create_client
from smtp_courier.smtp.composer import build_mime_message, compose
from smtp_courier.smtp.errors import (
    CompositionError,
    SendError,
    SMTPAuthenticationError,
    SMTPConnectionError,
    SMTPError,
    SMTPTLSError,
)

__all__ = [
    "SMTPClient",
    "create_client",
    "compose",
    "build_mime_message",
    "SMTPError",
    "CompositionError",
    "SMTPConnectionError",
    "SMTPTLSError",
    "SMTPAuthenticationError",
    "SendError",
]
