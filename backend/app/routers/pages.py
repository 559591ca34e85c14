"""HTML pages for the operator dashboard (served from ``backend/static``)."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"

router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/")
async def login_page():
    return FileResponse(STATIC_DIR / "login.html")


@router.get("/dashboard")
async def dashboard_page():
    return FileResponse(STATIC_DIR / "dashboard.html")


@router.get("/log-reading")
async def log_reading_page():
    return FileResponse(STATIC_DIR / "log-reading.html")
