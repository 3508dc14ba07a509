import asyncio
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr
from functools import partial
from typing import Optional

from loguru import logger

from .config import SMTPConfig, get_smtp_config
from .render import RenderedEmail


def build_message(email: RenderedEmail, sender: str) -> EmailMessage:
    domain = parseaddr(sender)[1].rpartition("@")[2] or None
    msg = EmailMessage()
    msg["Subject"] = email.subject
    msg["From"] = sender
    msg["To"] = email.to
    msg["Message-ID"] = make_msgid(domain=domain)
    msg.set_content(email.html, subtype="html")
    return msg


def send_message(msg: EmailMessage, config: SMTPConfig) -> None:
    """NOTE: blocking"""
    if config.smtp_secure:
        smtp: smtplib.SMTP = smtplib.SMTP_SSL(
            config.smtp_host, config.smtp_port, timeout=config.smtp_timeout
        )
    else:
        smtp = smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=config.smtp_timeout)
    with smtp as s:
        if not config.smtp_secure:
            s.ehlo()
            # upgrade only when the server offers it
            if s.has_extn("starttls"):
                s.starttls()
                s.ehlo()
        s.login(config.smtp_user, config.smtp_pass)
        s.send_message(msg)


async def send_email(email: RenderedEmail, config: Optional[SMTPConfig] = None) -> str:
    """Sends a rendered email and returns its Message-ID.

    Raises
    ------
    `MissingConfigError`
        If the SMTP settings are incomplete.
    `smtplib.SMTPException`
        If the SMTP server rejects the connection or the message.
    """
    config = config or get_smtp_config()
    msg = build_message(email, config.smtp_from)
    logger.debug(f"Sending {email.kind.value} email to {email.to} via {config.smtp_host}")
    loop = asyncio.get_event_loop()
    await loop.run_in_executor(None, partial(send_message, msg, config))
    return str(msg["Message-ID"])
