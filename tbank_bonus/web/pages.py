# tbank_bonus/web/pages.py
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from tbank_bonus.api.bonus_rates import get_rate_service
from tbank_bonus.services.rate_service import RateService

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
def calculator_page(request: Request, service: RateService = Depends(get_rate_service)):
    result = service.get_rates()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "page_title": request.app.state.settings.APP_TITLE,
            # при недоступной БД страница всё равно открывается, ставки подтянет JS
            "rates": result.body if result.ok else {},
            "load_error": None if result.ok else result.body.get("error"),
        },
    )
