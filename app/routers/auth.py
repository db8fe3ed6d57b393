import os
from fastapi import APIRouter, Form
from fastapi.responses import JSONResponse
from app.dependencies import create_session_token, SESSION_COOKIE, SESSION_MAX_AGE

router = APIRouter(tags=["auth"])


def _app_password() -> str:
    """Read APP_PASSWORD at call time so tests can set it via env."""
    return os.environ.get("APP_PASSWORD", "")


@router.post("/login")
async def login(household: str = Form(...), password: str = Form(...)):
    household = household.strip()
    if household and password and password == _app_password():
        resp = JSONResponse({"household": household})
        resp.set_cookie(
            SESSION_COOKIE,
            create_session_token(household),
            httponly=True,
            samesite="lax",
            max_age=SESSION_MAX_AGE,
        )
        return resp
    return JSONResponse({"detail": "Invalid household or password"}, status_code=401)


@router.post("/logout")
async def logout():
    resp = JSONResponse({"ok": True})
    resp.delete_cookie(SESSION_COOKIE)
    return resp
