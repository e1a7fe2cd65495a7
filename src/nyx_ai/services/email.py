"""Best-effort email delivery over SMTP."""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Set

import structlog

from ..config import Settings

logger = structlog.get_logger()


class Mailer:
    """Sends HTML mail in background tasks.

    ``dispatch`` never raises and never blocks the request: each send runs
    in a worker thread and its failure is only logged.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pending: Set[asyncio.Task] = set()

    @property
    def configured(self) -> bool:
        return bool(self.settings.email_user and self.settings.email_pass)

    @property
    def sender(self) -> str:
        return f"Nyx AI <{self.settings.email_user}>"

    def send(self, to_email: str, subject: str, html: str) -> None:
        """Send one message synchronously."""
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to_email
        msg.attach(MIMEText(html, "html"))

        with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30) as server:
            if self.settings.smtp_use_tls:
                server.starttls()
            server.login(self.settings.email_user, self.settings.email_pass)
            server.send_message(msg)

    def dispatch(self, to_email: str, subject: str, html: str) -> None:
        """Queue a send without waiting for it."""
        if not self.configured:
            logger.warning("email_not_configured", to=to_email, subject=subject)
            return
        task = asyncio.create_task(asyncio.to_thread(self.send, to_email, subject, html))
        self._pending.add(task)
        task.add_done_callback(self._make_callback(to_email, subject))

    def _make_callback(self, to_email: str, subject: str):
        def _done(task: asyncio.Task) -> None:
            self._pending.discard(task)
            if task.cancelled():
                logger.warning("email_send_cancelled", to=to_email, subject=subject)
            elif task.exception() is not None:
                logger.error(
                    "email_send_failed", to=to_email, subject=subject, error=str(task.exception())
                )
            else:
                logger.info("email_sent", to=to_email, subject=subject)

        return _done

    async def drain(self) -> None:
        """Wait for every queued send to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
