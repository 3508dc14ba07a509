from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from mycad_core.utils.request import read_payload
from mycad_core.utils.time import isoformat_utc

from .config import get_config
from .exceptions import EmailValidationError, install_handlers
from .render import ACTIONS, render_email
from .smtp import send_email

HEALTH = "health"
AVAILABLE_ACTIONS = [*ACTIONS, HEALTH]

app = FastAPI()
install_handlers(app)


@app.post("/")
async def dispatch(request: Request) -> Any:
    """Render and send a transactional email, selected by `action`."""
    payload = await read_payload(request)
    action = str(payload.get("action") or "").strip()

    if not action:
        return JSONResponse(
            status_code=400,
            content={
                "ok": False,
                "error": "Missing action parameter",
                "availableActions": AVAILABLE_ACTIONS,
            },
        )

    if action == HEALTH:
        return {
            "ok": True,
            "status": "healthy",
            "timestamp": isoformat_utc(),
        }

    if action not in ACTIONS:
        raise EmailValidationError(f"Unknown action: {action}")

    email = render_email(action, payload, app_url=get_config().app_url)
    message_id = await send_email(email)
    logger.info(f"{email.kind.value} email sent to {email.to}: {message_id}")
    return {"ok": True, "messageId": message_id, "action": action}
