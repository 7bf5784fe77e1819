import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from currency_converter.core.config import Settings
from currency_converter.core.logging import session_id_ctx
from currency_converter.models.constants import CURRENCIES
from currency_converter.models.conversion import ConversionForm
from currency_converter.services.sessions import Session, SessionRegistry

logger = logging.getLogger("converter.ui")

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(
    directory=str(Path(__file__).resolve().parent.parent / "templates")
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


async def _resolve_session(
    request: Request, settings: Settings, sessions: SessionRegistry
) -> Session:
    """Look up the caller's session, creating and mounting a new one if needed."""
    session, created = sessions.get_or_create(
        request.cookies.get(settings.session_cookie_name)
    )
    session_id_ctx.set(session.id)
    if created:
        logger.info("new converter session")
        await session.view.mount()
    return session


def _render(
    request: Request,
    settings: Settings,
    session: Session,
    errors: Optional[List[str]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    view = session.view
    context = {
        "app_name": settings.app_name,
        "version": settings.version,
        "currencies": CURRENCIES,
        "state": view.state,
        "converted": view.converted_display(),
        "rate_summary": view.rate_summary(),
        "as_of": view.rates.as_of if view.current_rate() is not None else None,
        "notifications": session.outbox.drain(),
        "errors": errors or [],
    }
    response = templates.TemplateResponse(
        request, "converter.html", context, status_code=status_code
    )
    response.set_cookie(
        settings.session_cookie_name, session.id, httponly=True, samesite="lax"
    )
    return response


@router.get("/ui", response_class=HTMLResponse)
async def ui_converter(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    sessions: SessionRegistry = Depends(get_sessions),
):
    session = await _resolve_session(request, settings, sessions)
    return _render(request, settings, session)


@router.post("/ui", response_class=HTMLResponse)
async def ui_convert(
    request: Request,
    amount: str = Form(""),
    source: str = Form(""),
    destination: str = Form(""),
    action: str = Form("convert"),
    settings: Settings = Depends(get_app_settings),
    sessions: SessionRegistry = Depends(get_sessions),
):
    """Apply a form submission.

    Amount and destination are applied first so the recompute that follows a
    new rate table sees the latest input; the source change (which may fetch)
    goes last, then the optional swap.
    """
    session = await _resolve_session(request, settings, sessions)
    try:
        form = ConversionForm(
            amount=amount, source=source, destination=destination, action=action
        )
    except ValidationError as ve:
        errors: List[str] = []
        for err in ve.errors():
            loc = ".".join([str(p) for p in err.get("loc", [])])
            msg = err.get("msg", "invalid")
            errors.append(f"{loc}: {msg}")
        return _render(request, settings, session, errors=errors, status_code=400)

    view = session.view
    view.set_amount(form.amount)
    view.select_destination(form.destination)
    await view.select_source(form.source)
    if form.action == "swap":
        await view.swap()
    return _render(request, settings, session)
