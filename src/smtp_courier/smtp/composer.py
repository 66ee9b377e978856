# =============================================================================
# MIME Message Composer
# =============================================================================
# Turns an OutboundMessage into the bytes handed to SMTP DATA.
#
# Layout (RFC 2045/2046):
#
#   From: a@x.com
#   To: b@y.com,c@y.com
#   Subject: Hi
#   MIME-Version: 1.0
#   Content-Type: multipart/mixed; boundary="==...=="
#
#   --==...==
#   Content-Type: text/plain            <- the body
#   --==...==
#   Content-Type: application/octet-stream
#   Content-Disposition: attachment; filename="r.txt"
#   --==...==--
#
# The boundary is left for the email generator to pick at serialization
# time. It keeps drawing random tokens until one doesn't occur anywhere in
# the flattened parts, so it can't collide with the body or an attachment.
# =============================================================================

import logging
from email.charset import QP, Charset
from email.encoders import encode_base64
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.policy import compat32

from smtp_courier.core import OutboundMessage
from smtp_courier.smtp.errors import CompositionError

logger = logging.getLogger(__name__)

# RFC 5322 line ending. Pass linesep="\n" to compose() for bare line feeds.
CRLF = "\r\n"

# RFC 5322 section 2.1.1, excluding the line ending
MAX_LINE_LENGTH = 998


def compose(message: OutboundMessage, *, linesep: str = CRLF) -> bytes:
    """
    Build the wire-format bytes for a message.

    Args:
        message: The message to format.
        linesep: Line terminator for headers and body lines.

    Header values are written on a single line exactly as given (no
    folding), so To stays a plain comma-joined list. ASCII bodies go out
    verbatim as 7bit unless a line exceeds the RFC 5322 limit of 998
    characters, in which case the body is quoted-printable encoded.

    Returns:
        A complete multipart/mixed message.

    Raises:
        CompositionError: If any part can't be built or serialized. Nothing
                          partial is ever returned.
    """
    mime = build_mime_message(message)

    # max_line_length=0 turns off compat32's 78-column header folding
    policy = compat32.clone(linesep=linesep, max_line_length=0)
    try:
        payload = mime.as_bytes(policy=policy)
    except (UnicodeError, ValueError, TypeError) as e:
        raise CompositionError(f"failed to serialize message: {e}") from e

    logger.debug(
        f"Composed message for {len(message.to)} recipient(s), "
        f"{len(message.attachments)} attachment(s), {len(payload)} bytes"
    )
    return payload


def build_mime_message(message: OutboundMessage) -> MIMEMultipart:
    """
    Build the MIME tree for a message without serializing it.

    Raises:
        CompositionError: On missing recipients, line breaks in header
                          fields, or a part that can't be created.
    """
    if not message.to:
        raise CompositionError("no recipients specified")

    _check_header_value("From", message.sender)
    for recipient in message.to:
        _check_header_value("To", recipient)
    _check_header_value("Subject", message.subject)

    msg = MIMEMultipart("mixed")
    msg["From"] = message.sender
    msg["To"] = ",".join(message.to)
    msg["Subject"] = message.subject

    # MIMEMultipart writes Content-Type and MIME-Version first; move them
    # after Subject so the header block reads From, To, Subject, MIME-Version,
    # Content-Type.
    for name in ("MIME-Version", "Content-Type"):
        value = msg[name]
        del msg[name]
        msg[name] = value

    try:
        msg.attach(_text_part(message.body))
    except (UnicodeError, ValueError, TypeError) as e:
        raise CompositionError(f"failed to write email body: {e}") from e

    for filename, data in message.attachments.items():
        try:
            _check_header_value("filename", filename)
            msg.attach(_attachment_part(filename, data))
        except (CompositionError, UnicodeError, ValueError, TypeError) as e:
            raise CompositionError(f"failed to attach file {filename}: {e}") from e

    return msg


def _text_part(body: str) -> MIMEText:
    if not isinstance(body, str):
        raise TypeError(f"body must be str, not {type(body).__name__}")
    if any(len(line) > MAX_LINE_LENGTH for line in body.splitlines()):
        charset = Charset("us-ascii" if body.isascii() else "utf-8")
        charset.body_encoding = QP
        return MIMEText(body, "plain", charset)
    # No charset given: us-ascii/7bit when possible (body goes out verbatim),
    # utf-8/base64 otherwise
    return MIMEText(body, "plain")


def _attachment_part(filename: str, data: bytes) -> MIMEBase:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"content must be bytes, not {type(data).__name__}")

    part = MIMEBase("application", "octet-stream")
    part.set_payload(bytes(data))
    encode_base64(part)
    # add_header quotes the filename and escapes any '"' or '\' inside it
    part.add_header("Content-Disposition", "attachment", filename=filename)
    return part


def _check_header_value(name: str, value: str) -> None:
    """Reject values that would end the header line early (header injection)."""
    if not isinstance(value, str):
        raise CompositionError(f"{name} must be str, not {type(value).__name__}")
    if "\r" in value or "\n" in value:
        raise CompositionError(f"{name} contains a line break: {value!r}")
