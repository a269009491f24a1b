"""Tests for notification sinks and the background dispatcher."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from typing import TYPE_CHECKING

import pytest

from hr_ledger.config import Settings
from hr_ledger.exceptions import NotificationError
from hr_ledger.services import notification
from hr_ledger.services.notification import (
    InMemoryNotificationSink,
    LoggingNotificationSink,
    NotificationDispatcher,
    NotificationMessage,
    NotificationSink,
    SmtpNotificationSink,
    build_sink,
    notify,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


def _message(address: str = "e1@example.com", subject: str = "Hello") -> NotificationMessage:
    return NotificationMessage(address=address, subject=subject, body="Body")


def _smtp_settings(**overrides: object) -> Settings:
    values: dict = {
        "smtp_host": "smtp.test",
        "smtp_port": 2525,
        "smtp_username": "user@test",
        "smtp_password": "secret",
    }
    values.update(overrides)
    return Settings(**values)


class FailingSink:
    """Raises for one address, delivers the rest."""

    def __init__(self, bad_address: str) -> None:
        self.bad_address = bad_address
        self.delivered = InMemoryNotificationSink()

    async def send(self, message: NotificationMessage) -> None:
        if message.address == self.bad_address:
            raise NotificationError(f"mailbox {message.address} unavailable")
        await self.delivered.send(message)


class BrokenSink:
    async def send(self, message: NotificationMessage) -> None:
        raise RuntimeError("unexpected")


@pytest.fixture
async def local_dispatcher() -> AsyncIterator[tuple[NotificationDispatcher, InMemoryNotificationSink]]:
    sink = InMemoryNotificationSink()
    dispatcher = NotificationDispatcher(sink)
    yield dispatcher, sink
    await dispatcher.stop()


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


async def test_dispatcher_delivers_in_order(
    local_dispatcher: tuple[NotificationDispatcher, InMemoryNotificationSink],
) -> None:
    dispatcher, sink = local_dispatcher

    for subject in ("first", "second", "third"):
        assert dispatcher.dispatch(_message(subject=subject)) is True
    await dispatcher.drain()

    assert [m.subject for m in sink.sent] == ["first", "second", "third"]


async def test_dispatch_does_not_wait_for_delivery(
    local_dispatcher: tuple[NotificationDispatcher, InMemoryNotificationSink],
) -> None:
    dispatcher, sink = local_dispatcher

    dispatcher.dispatch(_message())

    assert sink.sent == []
    await dispatcher.drain()
    assert len(sink.sent) == 1


async def test_failed_delivery_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    sink = FailingSink("bad@example.com")
    dispatcher = NotificationDispatcher(sink)

    with caplog.at_level(logging.WARNING, logger="hr_ledger.services.notification"):
        dispatcher.dispatch(_message("bad@example.com"))
        dispatcher.dispatch(_message("good@example.com"))
        await dispatcher.drain()

    assert [m.address for m in sink.delivered.sent] == ["good@example.com"]
    assert "mailbox bad@example.com unavailable" in caplog.text
    assert dispatcher.running
    await dispatcher.stop()


async def test_unexpected_sink_error_keeps_worker_alive(caplog: pytest.LogCaptureFixture) -> None:
    dispatcher = NotificationDispatcher(BrokenSink())

    with caplog.at_level(logging.ERROR, logger="hr_ledger.services.notification"):
        dispatcher.dispatch(_message())
        dispatcher.dispatch(_message())
        await dispatcher.drain()

    assert dispatcher.running
    assert caplog.text.count("Notification to e1@example.com failed") == 2
    await dispatcher.stop()


async def test_full_queue_drops_message(caplog: pytest.LogCaptureFixture) -> None:
    sink = InMemoryNotificationSink()
    dispatcher = NotificationDispatcher(sink, maxsize=1)

    with caplog.at_level(logging.WARNING, logger="hr_ledger.services.notification"):
        accepted = dispatcher.dispatch(_message(subject="kept"))
        dropped = dispatcher.dispatch(_message(subject="dropped"))
        await dispatcher.drain()

    assert (accepted, dropped) == (True, False)
    assert [m.subject for m in sink.sent] == ["kept"]
    assert "queue full" in caplog.text
    await dispatcher.stop()


async def test_stop_attempts_remaining_messages() -> None:
    sink = InMemoryNotificationSink()
    dispatcher = NotificationDispatcher(sink)
    dispatcher.dispatch(_message(subject="a"))
    dispatcher.dispatch(_message(subject="b"))

    await dispatcher.stop()

    assert [m.subject for m in sink.sent] == ["a", "b"]
    assert not dispatcher.running


async def test_stop_gives_up_after_timeout(caplog: pytest.LogCaptureFixture) -> None:
    class SlowSink:
        async def send(self, message: NotificationMessage) -> None:
            await asyncio.sleep(10)

    dispatcher = NotificationDispatcher(SlowSink())
    dispatcher.dispatch(_message())

    with caplog.at_level(logging.WARNING, logger="hr_ledger.services.notification"):
        await dispatcher.stop(timeout=0.05)

    assert not dispatcher.running
    assert "not drained" in caplog.text


async def test_notify_skips_missing_address(dispatcher: NotificationDispatcher, sink: InMemoryNotificationSink) -> None:
    notify(None, "Subject", "Body")
    notify("", "Subject", "Body")
    notify("e1@example.com", "Subject", "Body")
    await dispatcher.drain()

    assert [m.address for m in sink.sent] == ["e1@example.com"]


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------


def test_sinks_satisfy_protocol() -> None:
    assert isinstance(InMemoryNotificationSink(), NotificationSink)
    assert isinstance(LoggingNotificationSink(), NotificationSink)
    assert isinstance(SmtpNotificationSink(_smtp_settings()), NotificationSink)


def test_build_sink_uses_smtp_when_configured() -> None:
    assert isinstance(build_sink(_smtp_settings()), SmtpNotificationSink)


def test_build_sink_falls_back_to_logging() -> None:
    assert isinstance(build_sink(_smtp_settings(smtp_password=None)), LoggingNotificationSink)


async def test_logging_sink_logs_message(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="hr_ledger.services.notification"):
        await LoggingNotificationSink().send(_message(subject="Leave Application Update"))

    assert "would send to e1@example.com" in caplog.text


async def test_smtp_sink_sends_message(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict = {}

    class DummySMTP:
        def __init__(self, server, port, timeout=None):
            captured["server"] = (server, port)

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            pass

        def starttls(self):
            captured["tls"] = True

        def login(self, username, password):
            captured["login"] = (username, password)

        def send_message(self, msg):
            captured["msg"] = msg

    monkeypatch.setattr(notification.smtplib, "SMTP", DummySMTP)

    await SmtpNotificationSink(_smtp_settings()).send(_message(subject="Loan Application Update"))

    assert captured["server"] == ("smtp.test", 2525)
    assert captured["tls"] is True
    assert captured["login"] == ("user@test", "secret")
    msg = captured["msg"]
    assert msg["To"] == "e1@example.com"
    assert msg["Subject"] == "Loan Application Update"
    assert msg.get_content().strip() == "Body"


async def test_smtp_sink_wraps_transport_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    class RefusingSMTP:
        def __init__(self, server, port, timeout=None):
            raise smtplib.SMTPConnectError(421, b"service not available")

    monkeypatch.setattr(notification.smtplib, "SMTP", RefusingSMTP)

    with pytest.raises(NotificationError):
        await SmtpNotificationSink(_smtp_settings()).send(_message())
