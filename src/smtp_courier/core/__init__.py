# =============================================================================
# smtp-courier Core Module
# =============================================================================
# Plain dataclasses describing what gets sent and where. Nothing in here
# touches the network, so these can be imported anywhere.
#
#   - ClientConfig: SMTP server address, secret and connection options
#   - TLSPolicy: What to do when the server doesn't offer STARTTLS
#   - OutboundMessage: One email ready to be composed and sent
# =============================================================================

from smtp_courier.core.config import IMPLICIT_TLS_PORT, ClientConfig, TLSPolicy
from smtp_courier.core.message import OutboundMessage

__all__ = [
    "ClientConfig",
    "TLSPolicy",
    "IMPLICIT_TLS_PORT",
    "OutboundMessage",
]
