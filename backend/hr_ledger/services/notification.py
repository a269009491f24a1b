"""Best-effort outbound notifications.

Senders hand messages to a NotificationDispatcher, which queues them and
delivers them from a background task. A failed delivery is logged and
dropped; it never reaches the code that dispatched it.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import smtplib
from email.message import EmailMessage
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel

from hr_ledger.config import get_settings
from hr_ledger.exceptions import NotificationError

if TYPE_CHECKING:
    from hr_ledger.config import Settings

logger = logging.getLogger(__name__)

STOP_TIMEOUT_SECONDS = 10.0


class NotificationMessage(BaseModel):
    """A single message for one address."""

    address: str
    subject: str
    body: str


@runtime_checkable
class NotificationSink(Protocol):
    """Interface for message delivery."""

    async def send(self, message: NotificationMessage) -> None:
        """Deliver the message. Raises NotificationError on failure."""
        ...


class SmtpNotificationSink:
    """Delivers messages over SMTP with the stdlib client, off the event loop."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def _build(self, message: NotificationMessage) -> EmailMessage:
        email = EmailMessage()
        email["From"] = self._settings.mail_from
        email["To"] = message.address
        email["Subject"] = message.subject
        email.set_content(message.body)
        return email

    def _send_sync(self, message: NotificationMessage) -> None:
        settings = self._settings
        email = self._build(message)
        try:
            with smtplib.SMTP(settings.smtp_host or "", settings.smtp_port, timeout=30) as smtp:
                if settings.smtp_use_tls:
                    smtp.starttls()
                if settings.smtp_username and settings.smtp_password:
                    smtp.login(settings.smtp_username, settings.smtp_password)
                smtp.send_message(email)
        except (smtplib.SMTPException, OSError) as exc:
            msg = f"SMTP delivery to {message.address} failed: {exc}"
            raise NotificationError(msg) from exc

    async def send(self, message: NotificationMessage) -> None:
        await asyncio.to_thread(self._send_sync, message)


class LoggingNotificationSink:
    """Debug-mode sink used when SMTP is not configured."""

    async def send(self, message: NotificationMessage) -> None:
        logger.info("EMAIL DEBUG MODE: would send to %s (subject=%s)", message.address, message.subject)
        logger.debug("Body: %s", message.body)


class InMemoryNotificationSink:
    """Keeps every delivered message in order. For tests and local runs."""

    def __init__(self) -> None:
        self.sent: list[NotificationMessage] = []

    async def send(self, message: NotificationMessage) -> None:
        self.sent.append(message)

    def to(self, address: str) -> list[NotificationMessage]:
        """Messages delivered to one address."""
        return [m for m in self.sent if m.address == address]


def build_sink(settings: Settings) -> NotificationSink:
    """Pick the SMTP sink when mail is configured, the logging sink otherwise."""
    if settings.smtp_configured:
        return SmtpNotificationSink(settings)
    return LoggingNotificationSink()


class NotificationDispatcher:
    """Fire-and-forget queue in front of a NotificationSink."""

    def __init__(self, sink: NotificationSink, maxsize: int = 1000) -> None:
        self._sink = sink
        self._queue: asyncio.Queue[NotificationMessage] = asyncio.Queue(maxsize=maxsize)
        self._worker: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        """Start the delivery task on the running loop if it is not already up."""
        if not self.running:
            self._worker = asyncio.create_task(self._run(), name="notification-worker")
            logger.debug("Notification worker started")

    def dispatch(self, message: NotificationMessage) -> bool:
        """Queue a message without waiting for delivery. Returns False if it was dropped."""
        self.start()
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Notification queue full, dropping %r for %s", message.subject, message.address)
            return False
        return True

    async def _run(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                await self._sink.send(message)
                logger.info("Notification delivered to %s: %s", message.address, message.subject)
            except NotificationError as exc:
                logger.warning("Notification failed: %s", exc)
            except Exception:
                logger.exception("Notification to %s failed", message.address)
            finally:
                self._queue.task_done()

    async def drain(self) -> None:
        """Wait until every queued message has been attempted."""
        if self.running:
            await self._queue.join()

    async def stop(self, timeout: float = STOP_TIMEOUT_SECONDS) -> None:
        """Attempt the remaining messages, then stop the delivery task."""
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self.drain(), timeout=timeout)
        except TimeoutError:
            logger.warning("Notification queue not drained within %.0fs; %d dropped", timeout, self._queue.qsize())
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None
        logger.debug("Notification worker stopped")


_dispatcher: NotificationDispatcher | None = None


def get_dispatcher() -> NotificationDispatcher:
    """Return the process-wide dispatcher, building it from settings on first use."""
    global _dispatcher
    if _dispatcher is None:
        settings = get_settings()
        _dispatcher = NotificationDispatcher(build_sink(settings), maxsize=settings.notification_queue_size)
    return _dispatcher


def set_dispatcher(dispatcher: NotificationDispatcher | None) -> None:
    """Override the dispatcher (for testing or production wiring)."""
    global _dispatcher
    _dispatcher = dispatcher


def notify(address: str | None, subject: str, body: str) -> None:
    """Dispatch a message if there is somewhere to send it."""
    if not address:
        logger.debug("No address for notification %r, skipping", subject)
        return
    get_dispatcher().dispatch(NotificationMessage(address=address, subject=subject, body=body))
