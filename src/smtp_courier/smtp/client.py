# =============================================================================
# SMTP Client
# =============================================================================
# Async SMTP client for sending composed messages.
#
# Key responsibilities:
#   - Connection management with implicit TLS / STARTTLS
#   - Enforcing the TLS policy before any credentials are sent
#   - AUTH PLAIN authentication
#   - MAIL FROM / RCPT TO / DATA for one message
#
# Every call opens its own connection and closes it before returning, on
# success and on failure alike. The client itself holds nothing but its
# read-only configuration.
#
# Uses aiosmtplib for the protocol.
# =============================================================================

import logging
import ssl
from collections.abc import AsyncIterator, Iterable, Mapping
from contextlib import asynccontextmanager

import aiosmtplib

from smtp_courier.core import ClientConfig, OutboundMessage, TLSPolicy
from smtp_courier.smtp.composer import compose
from smtp_courier.smtp.errors import (
    SendError,
    SMTPAuthenticationError,
    SMTPConnectionError,
    SMTPTLSError,
)

logger = logging.getLogger(__name__)


class SMTPClient:
    """
    Async SMTP client bound to one server and secret.

    Usage:
        >>> client = SMTPClient(ClientConfig("smtp.example.com", "587", secret))
        >>> await client.validate("me@example.com")
        >>> await client.send("me@example.com", ["you@example.com"], "Hi", "Hello")

    Attributes:
        config: Server address, secret and connection options.
    """

    # Timeout for SMTP operations (seconds)
    TIMEOUT = 30

    def __init__(self, config: ClientConfig) -> None:
        """
        Initialize the SMTP client. Performs no I/O.

        Args:
            config: Connection parameters for the SMTP server.
        """
        self.config = config

    async def send(
        self,
        sender: str,
        to: Iterable[str],
        subject: str,
        body: str,
        attachments: Mapping[str, bytes] | None = None,
    ) -> None:
        """
        Compose and send an email.

        Args:
            sender: From address. Also the AUTH PLAIN username.
            to: Recipient addresses (at least one).
            subject: Subject line.
            body: Plain-text body.
            attachments: Optional mapping of filename -> content.

        Raises:
            CompositionError: If the message can't be built (no I/O happened).
            SMTPConnectionError: If unable to connect.
            SMTPTLSError: If the connection can't be secured.
            SMTPAuthenticationError: If authentication fails.
            SendError: If the server rejects the sender, a recipient or data.
        """
        message = OutboundMessage(
            sender=sender,
            to=to,
            subject=subject,
            body=body,
            attachments=attachments or {},
        )
        await self.send_message(message)

    async def send_message(self, message: OutboundMessage) -> None:
        """
        Send a prepared message to all of its recipients.

        All recipients share one transaction: if the server refuses any of
        them, DATA is never sent and SendError is raised.
        """
        payload = compose(message)

        async with self._session(message.sender) as smtp:
            logger.info(f"Sending email to {', '.join(message.to)}")
            try:
                await smtp.mail(message.sender)
                for recipient in message.to:
                    await smtp.rcpt(recipient)
                await smtp.data(payload)
            except aiosmtplib.SMTPException as e:
                logger.error(f"Failed to send email: {e}")
                raise SendError(f"Failed to send email: {e}") from e

        logger.info(f"Email sent successfully via {self.config.address}")

    async def validate(self, user: str) -> None:
        """
        Check that the server is reachable, secure and accepts our credentials.

        Connects, negotiates TLS according to the policy and authenticates
        once as ``user``. Nothing is sent.

        Raises:
            SMTPConnectionError: If unable to connect.
            SMTPTLSError: If the connection can't be secured.
            SMTPAuthenticationError: If authentication fails.
        """
        async with self._session(user):
            logger.info(f"SMTP credentials for {user} accepted by {self.config.address}")

    # -------------------------------------------------------------------------
    # Connection lifecycle
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def _session(self, user: str) -> AsyncIterator[aiosmtplib.SMTP]:
        """
        Yield a connected, secured and authenticated client.

        The connection is closed when the block exits, whatever happened.
        """
        smtp = self._create_smtp()
        try:
            await self._connect(smtp)
            await self._secure(smtp)
            await self._authenticate(smtp, user)
            yield smtp
        finally:
            await self._disconnect(smtp)

    def _create_smtp(self) -> aiosmtplib.SMTP:
        try:
            port = self.config.port_number
        except ValueError as e:
            raise SMTPConnectionError(f"Invalid SMTP port {self.config.port!r}: {e}") from e

        # start_tls=False: STARTTLS is decided by _secure(), never implicitly
        return aiosmtplib.SMTP(
            hostname=self.config.host,
            port=port,
            use_tls=self.config.uses_implicit_tls,
            start_tls=False,
            validate_certs=self.config.validate_certs,
            local_hostname=self.config.local_hostname,
            timeout=self.config.timeout,
        )

    async def _connect(self, smtp: aiosmtplib.SMTP) -> None:
        """
        Open the TCP (or TLS) connection and greet the server.

        Raises:
            SMTPTLSError: If the implicit-TLS handshake fails.
            SMTPConnectionError: For any other connection failure.
        """
        mode = "implicit TLS" if self.config.uses_implicit_tls else "plaintext"
        logger.info(f"Connecting to SMTP {self.config.address} ({mode})")

        try:
            await smtp.connect()
        except ssl.SSLError as e:
            raise SMTPTLSError(f"TLS handshake with {self.config.address} failed: {e}") from e
        except (aiosmtplib.SMTPException, OSError) as e:
            if isinstance(e.__cause__, ssl.SSLError):
                raise SMTPTLSError(
                    f"TLS handshake with {self.config.address} failed: {e}"
                ) from e
            raise SMTPConnectionError(
                f"Failed to connect to SMTP {self.config.address}: {e}"
            ) from e

        try:
            await self._greet(smtp)
        except (aiosmtplib.SMTPException, OSError) as e:
            raise SMTPConnectionError(
                f"SMTP greeting with {self.config.address} failed: {e}"
            ) from e

        logger.debug("SMTP connection established")

    async def _greet(self, smtp: aiosmtplib.SMTP) -> None:
        """EHLO, falling back to HELO for servers without ESMTP."""
        try:
            await smtp.ehlo()
        except aiosmtplib.SMTPHeloError:
            logger.debug("EHLO rejected, falling back to HELO")
            await smtp.helo()

    async def _secure(self, smtp: aiosmtplib.SMTP) -> None:
        """
        Make sure the connection is encrypted before authenticating.

        Raises:
            SMTPTLSError: If STARTTLS fails, or the server doesn't offer it
                          and the policy is STRICT.
        """
        if self.config.uses_implicit_tls:
            logger.debug("Connection already uses TLS, skipping STARTTLS")
            return

        if smtp.supports_extension("starttls"):
            logger.debug("Upgrading connection with STARTTLS")
            try:
                await smtp.starttls()
                # Capabilities are reset by the upgrade
                await self._greet(smtp)
            except (aiosmtplib.SMTPException, ssl.SSLError, OSError) as e:
                raise SMTPTLSError(f"Failed to start TLS: {e}") from e
            return

        if self.config.security is TLSPolicy.STRICT:
            raise SMTPTLSError("TLS not supported by the server, aborted")

        logger.warning(
            f"{self.config.address} does not support STARTTLS, "
            "authenticating over an unencrypted connection"
        )

    async def _authenticate(self, smtp: aiosmtplib.SMTP, user: str) -> None:
        """
        AUTH PLAIN with the configured secret.

        Raises:
            SMTPAuthenticationError: If the server rejects the credentials or
                                     doesn't support authentication.
        """
        logger.debug(f"Authenticating as {user}")

        try:
            await smtp.auth_plain(user, self.config.secret)
        except aiosmtplib.SMTPException as e:
            raise SMTPAuthenticationError(
                f"SMTP authentication failed for {user}: {e}"
            ) from e

        logger.debug("SMTP authentication successful")

    async def _disconnect(self, smtp: aiosmtplib.SMTP) -> None:
        """QUIT politely, or drop the connection if that fails."""
        if not smtp.is_connected:
            return

        try:
            logger.debug("Disconnecting from SMTP")
            await smtp.quit()
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.warning(f"Error during SMTP disconnect: {e}")
            smtp.close()


def create_client(
    host: str,
    port: str | int,
    secret: str,
    *,
    security: TLSPolicy | str = TLSPolicy.STRICT,
    timeout: float = SMTPClient.TIMEOUT,
    validate_certs: bool = True,
    local_hostname: str | None = None,
) -> SMTPClient:
    """
    Build a client from plain connection values. Performs no I/O.

    Example:
        >>> client = create_client("smtp.example.com", "465", "app-password")
    """
    config = ClientConfig(
        host=host,
        port=str(port),
        secret=secret,
        security=TLSPolicy(security),
        timeout=timeout,
        validate_certs=validate_certs,
        local_hostname=local_hostname,
    )
    return SMTPClient(config)
