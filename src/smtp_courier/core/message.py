# =============================================================================
# Outbound Message Model
# =============================================================================
# An email on its way out: sender, recipients, subject, a plain-text body
# and any number of binary attachments.
#
# Messages are frozen. A new one is built for every send, and the transport
# client forgets it as soon as the send returns.
# =============================================================================

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class OutboundMessage:
    """
    A plain-text email with optional attachments.

    Attributes:
        sender: The From address. Also used as the SMTP AUTH username.
        to: Recipient addresses, in order. Lists are converted to a tuple.
        subject: Subject line.
        body: Plain-text body.
        attachments: Filename -> raw content. Wrapped in a read-only view.

    Example:
        >>> msg = OutboundMessage(
        ...     sender="a@x.com",
        ...     to=["b@y.com", "c@y.com"],
        ...     subject="Hi",
        ...     body="Hello",
        ...     attachments={"r.txt": b"data"},
        ... )
    """

    sender: str
    to: tuple[str, ...]
    subject: str = ""
    body: str = ""
    attachments: Mapping[str, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.to, str):
            # A bare string would otherwise be split into characters
            object.__setattr__(self, "to", (self.to,))
        else:
            object.__setattr__(self, "to", tuple(self.to))
        object.__setattr__(
            self, "attachments", MappingProxyType(dict(self.attachments or {}))
        )

    @property
    def has_attachments(self) -> bool:
        return bool(self.attachments)

    def __repr__(self) -> str:
        """Developer-friendly representation without attachment contents."""
        return (
            f"OutboundMessage(sender={self.sender!r}, to={list(self.to)!r}, "
            f"subject={self.subject!r}, attachments={list(self.attachments)!r})"
        )
