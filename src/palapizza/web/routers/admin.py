from fastapi import APIRouter, Request, Response
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from palapizza.config import Config
from palapizza.web.deps import AppDep, ConfigDep, SessionTokenDep
from palapizza.web.openapi import ErrorResponse, OkResponse

router = APIRouter(prefix="/admin", tags=["admin"])


class LoginRequest(BaseModel):
    """Staff authentication request."""

    password: str | None = Field(None, description="Admin password")


class MeResponse(BaseModel):
    authenticated: bool = Field(..., description="Whether the session cookie is a valid staff session")


def _is_secure(request: Request, config: Config) -> bool:
    if config.session_cookie_secure is not None:
        return config.session_cookie_secure
    return request.url.scheme == "https"


def set_session_cookie(response: Response, request: Request, config: Config, value: str, max_age: int) -> None:
    response.set_cookie(
        key=config.session_cookie_name,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=_is_secure(request, config),
    )


@router.post(
    "/login",
    summary="Staff login",
    description="Check the admin password and set the signed session cookie (valid 7 days).",
    operation_id="adminLogin",
    responses={
        200: {"description": "Logged in, session cookie set"},
        401: {"model": ErrorResponse, "description": "Wrong password"},
        500: {"model": ErrorResponse, "description": "Admin password or session secret not configured"},
    },
)
async def login(
    request: Request, response: Response, app: AppDep, config: ConfigDep, login_data: LoginRequest | None = None
) -> OkResponse:
    token = app.login((login_data.password if login_data else None) or "")
    set_session_cookie(response, request, config, token, config.session_max_age)
    return OkResponse()


@router.post(
    "/logout",
    summary="Staff logout",
    description="Clear the session cookie. The token itself stays valid until it expires.",
    operation_id="adminLogout",
)
async def logout(request: Request, response: Response, config: ConfigDep) -> OkResponse:
    set_session_cookie(response, request, config, "", 0)
    return OkResponse()


@router.get(
    "/logout",
    summary="Staff logout (link)",
    description="Clear the session cookie and redirect to the staff login page.",
    operation_id="adminLogoutRedirect",
    response_class=RedirectResponse,
    status_code=307,
)
async def logout_redirect(request: Request, config: ConfigDep) -> RedirectResponse:
    response = RedirectResponse(config.staff_login_path, status_code=307)
    set_session_cookie(response, request, config, "", 0)
    return response


@router.get(
    "/me",
    summary="Identity check",
    description="Tell whether the current session cookie belongs to logged in staff.",
    operation_id="adminMe",
)
async def me(app: AppDep, token: SessionTokenDep) -> MeResponse:
    return MeResponse(authenticated=app.is_authenticated(token))
