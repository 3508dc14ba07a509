import os

os.environ.setdefault("SMTP_HOST", "smtp.test")
os.environ.setdefault("SMTP_USER", "mailer")
os.environ.setdefault("SMTP_PASS", "secret")
os.environ.setdefault("APP_URL", "https://mycad.app")

import smtplib
from email.message import EmailMessage
from typing import Any

import pytest


class FakeSMTP:
    """Records the messages sent instead of talking to a server."""

    sent: list[EmailMessage] = []
    instances: list["FakeSMTP"] = []
    extensions: set[str] = {"starttls", "auth"}
    implicit_tls = False

    def __init__(self, host: str, port: int, timeout: float = 30, **kwargs: Any) -> None:
        self.host = host
        self.port = port
        self.tls = False
        self.greetings = 0
        self.credentials = None
        FakeSMTP.instances.append(self)

    def __enter__(self) -> "FakeSMTP":
        return self

    def __exit__(self, *args: Any) -> None:
        pass

    def ehlo(self) -> None:
        self.greetings += 1

    def has_extn(self, name: str) -> bool:
        return name.lower() in self.extensions

    def starttls(self) -> None:
        if "starttls" not in self.extensions:
            raise smtplib.SMTPNotSupportedError("STARTTLS extension not supported by server.")
        self.tls = True

    def login(self, user: str, password: str) -> None:
        self.credentials = (user, password)

    def send_message(self, msg: EmailMessage) -> None:
        FakeSMTP.sent.append(msg)


class FakeSMTPSSL(FakeSMTP):
    implicit_tls = True


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_smtp(monkeypatch: pytest.MonkeyPatch) -> type[FakeSMTP]:
    FakeSMTP.sent = []
    FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTPSSL)
    return FakeSMTP
