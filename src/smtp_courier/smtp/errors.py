# =============================================================================
# SMTP Errors
# =============================================================================
# One exception per stage that can fail. Every error is terminal for the call
# that raised it; the underlying cause is chained with "raise ... from".
#
#   SMTPError
#   ├── CompositionError         building the MIME payload
#   ├── SMTPConnectionError      DNS, dial, timeout, greeting
#   ├── SMTPTLSError             implicit TLS, STARTTLS, or no TLS available
#   ├── SMTPAuthenticationError  AUTH PLAIN rejected
#   └── SendError                MAIL FROM / RCPT TO / DATA rejected
# =============================================================================


class SMTPError(Exception):
    """Base exception for SMTP operations."""
    pass


class CompositionError(SMTPError):
    """Raised when the MIME message can't be built."""
    pass


class SMTPConnectionError(SMTPError):
    """Raised when unable to connect to SMTP server."""
    pass


class SMTPTLSError(SMTPError):
    """Raised when the connection can't be secured with TLS."""
    pass


class SMTPAuthenticationError(SMTPError):
    """Raised when SMTP authentication fails."""
    pass


class SendError(SMTPError):
    """Raised when the server rejects the sender, a recipient or the data."""
    pass
