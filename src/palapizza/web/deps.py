from typing import Annotated, cast

from fastapi import Depends, Request

from palapizza.app import App
from palapizza.config import Config
from palapizza.core.modules.whatsapp.links import is_mobile_user_agent


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_session_token(request: Request, config: Annotated[Config, Depends(get_config)]) -> str | None:
    """Raw session cookie, validated by the App for each privileged operation."""
    return request.cookies.get(config.session_cookie_name)


def is_mobile_request(request: Request) -> bool:
    return is_mobile_user_agent(request.headers.get("user-agent"))


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
SessionTokenDep = Annotated[str | None, Depends(get_session_token)]
MobileDep = Annotated[bool, Depends(is_mobile_request)]
