from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Final, Optional, Union

from .config import get_config
from .exceptions import EmailValidationError
from .links import build_url
from .templates import render_template
from .translations import DEFAULT_LANG, TRANSLATIONS, get_translations

Params = dict[str, Any]


class EmailKind(str, Enum):
    VERIFICATION = "verification"
    PASSWORD_RESET = "password-reset"
    REPORT = "report"
    NOTIFICATION = "notification"
    SIMPLE = "simple"

    @property
    def action(self) -> str:
        return f"send-{self.value}"


ACTIONS: Final = {kind.action: kind for kind in EmailKind}


@dataclass
class RenderedEmail:
    kind: EmailKind
    to: str
    subject: str
    html: str


def resolve_kind(kind: Union[str, EmailKind]) -> EmailKind:
    """Accepts both template names ("report") and action names ("send-report")."""
    if isinstance(kind, EmailKind):
        return kind
    if kind in ACTIONS:
        return ACTIONS[kind]
    try:
        return EmailKind(kind)
    except ValueError:
        raise EmailValidationError(f"Unknown action: {kind}")


def _get(params: Params, key: str) -> Optional[str]:
    """Returns a parameter as a string. Empty values count as missing."""
    v = params.get(key)
    if v is None or v == "":
        return None
    return str(v)


def _link(
    params: Params, link_field: str, path: str, app_url: str
) -> str:
    link = _get(params, link_field)
    if link:
        return link
    token = _get(params, "token")
    if token:
        return build_url(app_url, path, {"token": token})
    user_id, secret = _get(params, "userId"), _get(params, "secret")
    if user_id and secret:
        return build_url(app_url, path, {"userId": user_id, "secret": secret})
    raise EmailValidationError(
        f"Missing required fields: {link_field} OR (token) OR (userId AND secret)"
    )


def _require_email(params: Params) -> str:
    email = _get(params, "email")
    if not email:
        raise EmailValidationError("Missing required field: email")
    return email


def _verification(params: Params, t: dict, app_url: str) -> tuple[str, str, Params]:
    _require_email(params)
    link = _link(params, "verificationLink", "/verify-email", app_url)
    s = t["verification"]
    return s["subject"], s["title"], {"link": link}


def _password_reset(params: Params, t: dict, app_url: str) -> tuple[str, str, Params]:
    _require_email(params)
    link = _link(params, "resetLink", "/reset-password", app_url)
    s = t["password_reset"]
    return s["subject"], s["title"], {"link": link}


def _report(params: Params, t: dict, app_url: str) -> tuple[str, str, Params]:
    report_url = _get(params, "reportUrl")
    if not _get(params, "email") or not report_url:
        raise EmailValidationError("Missing required fields: email, reportUrl")
    custom_subject = _get(params, "subject")
    context = {
        "link": report_url,
        "report_name": _get(params, "reportName") or "report.pdf",
    }
    return (
        custom_subject or t["report"]["subject"],
        custom_subject or t["report"]["title"],
        context,
    )


def _message(params: Params) -> str:
    message = _get(params, "message")
    if not _get(params, "email") or not message:
        raise EmailValidationError("Missing required fields: email, message")
    return message


def _notification(params: Params, t: dict, app_url: str) -> tuple[str, str, Params]:
    message = _message(params)
    subject = _get(params, "subject") or t["notification"]["subject"]
    context = {
        "message": message,
        "action_url": _get(params, "actionUrl"),
        "action_text": _get(params, "actionText"),
    }
    return subject, _get(params, "title") or subject, context


def _simple(params: Params, t: dict, app_url: str) -> tuple[str, str, Params]:
    message = _message(params)
    subject = _get(params, "subject") or "MyCAD"
    return subject, _get(params, "title") or subject, {"message": message}


BUILDERS: Final[dict[EmailKind, Callable[[Params, dict, str], tuple[str, str, Params]]]] = {
    EmailKind.VERIFICATION: _verification,
    EmailKind.PASSWORD_RESET: _password_reset,
    EmailKind.REPORT: _report,
    EmailKind.NOTIFICATION: _notification,
    EmailKind.SIMPLE: _simple,
}


def render_email(
    kind: Union[str, EmailKind],
    params: Params,
    lang: Optional[str] = None,
    app_url: Optional[str] = None,
) -> RenderedEmail:
    """Validates the parameters of an email and renders it.

    Parameters
    ----------
    kind : `Union[str, EmailKind]`
        Template name or action name, e.g. "verification" or "send-verification".
    params : `Params`
        Request parameters (email, name, token, message, ...).
    lang : `Optional[str]`, optional
        "es" or "en". Defaults to `params["lang"]`, then Spanish.
        Unknown languages fall back to Spanish.
    app_url : `Optional[str]`, optional
        Base URL of the web app used for generated links.

    Raises
    ------
    `EmailValidationError`
        If a required parameter is missing or the kind is unknown.
    """
    kind = resolve_kind(kind)
    lang = lang or _get(params, "lang") or DEFAULT_LANG
    if lang not in TRANSLATIONS:
        lang = DEFAULT_LANG
    t = get_translations(lang)
    subject, title, context = BUILDERS[kind](params, t, app_url or get_config().app_url)
    to = str(params["email"])
    html = render_template(
        f"{kind.value}.html",
        t=t,
        lang=lang,
        subject=subject,
        title=title,
        name=_get(params, "name"),
        **context,
    )
    return RenderedEmail(kind=kind, to=to, subject=subject, html=html)


def render(kind: Union[str, EmailKind], params: Params, lang: Optional[str] = None) -> str:
    """Renders the HTML body of an email. See `render_email`."""
    return render_email(kind, params, lang).html
