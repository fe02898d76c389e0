# app/routers/login.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from ..actions import authenticate
from ..config import settings
from . import deps

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login_route(request: Request, verifier=Depends(deps.get_verifier)):
    form = await request.form()
    message = await authenticate(verifier, None, form)
    if message:
        return JSONResponse({"message": message}, status_code=401)

    response = RedirectResponse(settings.DASHBOARD_PATH, status_code=303)
    session = getattr(verifier, "session", None) or {}
    token = session.get("access_token")
    if token:
        response.set_cookie(
            settings.SESSION_COOKIE_NAME,
            token,
            max_age=session.get("expires_in"),
            httponly=True,
            samesite="lax",
        )
    return response
