"""
Programmers Backend — Single-Page Shell
=========================================

What:  Renders index.html, the page that boots the Angular.js client.
How:   Jinja2 template; Angular itself takes over routing after load
       (partials are static files under /static/partials/).

The XSRF token is printed into <meta name="csrf-token"> as well as being
set as a cookie, for clients that post plain HTML forms.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"])

ANGULAR_MODULES = ("angular", "angular-route", "angular-resource")


def angular_scripts() -> list:
    """CDN URLs for the fixed set of Angular.js scripts, in load order."""
    base = f"{settings.angular_cdn.rstrip('/')}/{settings.angular_version}"
    return [f"{base}/{name}.min.js" for name in ANGULAR_MODULES]


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Programmers",
            "scripts": angular_scripts(),
            "xsrf_token": getattr(request.state, "xsrf_token", ""),
            "xsrf_cookie_name": settings.xsrf_cookie_name,
            "xsrf_header_name": settings.xsrf_header_name,
        },
    )
