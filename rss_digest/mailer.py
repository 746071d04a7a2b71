from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol, Sequence

import resend
from resend.exceptions import ResendError

from .config import DigestConfig
from .exceptions import DeliveryError

logger = logging.getLogger(__name__)


class DigestSender(Protocol):
    def send(self, *, subject: str, html: str, text: Optional[str] = None) -> str:  # pragma: no cover - interface
        ...


class NullDigestSender:
    """Dry-run sender: logs instead of delivering."""

    def send(self, *, subject: str, html: str, text: Optional[str] = None) -> str:
        logger.info("Dry run - skipping delivery of %r (%d bytes)", subject, len(html))
        return "dry-run"


class ResendDigestSender:
    """
    Deliver a digest through Resend.

    With explicit `recipients` a single email is sent to them; otherwise a
    broadcast is created for `audience_id` and sent immediately.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        from_address: str,
        audience_id: Optional[str] = None,
        recipients: Sequence[str] = (),
    ) -> None:
        if not api_key:
            raise DeliveryError("RESEND_API_KEY not set.")
        if not recipients and not audience_id:
            raise DeliveryError("Neither recipients nor RESEND_AUDIENCE_ID configured.")
        resend.api_key = api_key
        self._from = from_address
        self._audience_id = audience_id
        self._recipients = list(recipients)

    def send(self, *, subject: str, html: str, text: Optional[str] = None) -> str:
        try:
            if self._recipients:
                return self._send_email(subject, html, text)
            return self._send_broadcast(subject, html, text)
        except ResendError as e:
            raise DeliveryError(f"Resend rejected the digest: {e}") from e

    def _send_email(self, subject: str, html: str, text: Optional[str]) -> str:
        params: Dict[str, Any] = {
            "from": self._from,
            "to": self._recipients,
            "subject": subject,
            "html": html,
        }
        if text:
            params["text"] = text
        result = resend.Emails.send(params)
        message_id = _result_id(result)
        logger.info("Digest emailed to %d recipients (id=%s)", len(self._recipients), message_id)
        return message_id

    def _send_broadcast(self, subject: str, html: str, text: Optional[str]) -> str:
        params: Dict[str, Any] = {
            "audience_id": self._audience_id,
            "from": self._from,
            "subject": subject,
            "html": html,
        }
        if text:
            params["text"] = text
        created = resend.Broadcasts.create(params)
        broadcast_id = _result_id(created)
        resend.Broadcasts.send({"broadcast_id": broadcast_id})
        logger.info("Digest broadcast %s sent to audience %s", broadcast_id, self._audience_id)
        return broadcast_id


def _result_id(result: Any) -> str:
    message_id = result.get("id") if isinstance(result, dict) else getattr(result, "id", None)
    if not message_id:
        raise DeliveryError(f"Resend returned no id: {result!r}")
    return str(message_id)


def build_sender(config: DigestConfig) -> DigestSender:
    if config.dry_run:
        return NullDigestSender()
    return ResendDigestSender(
        api_key=config.resend_api_key,
        from_address=config.from_address,
        audience_id=config.audience_id,
        recipients=config.recipients,
    )
