from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request, Response
from mycad_core.appwrite import AppwriteClient
from mycad_core.utils.request import read_payload

from .config import get_config
from .exceptions import install_handlers
from .models import (
    CreateUserRequest,
    EnsuredProfile,
    EnsureProfileRequest,
    ProvisionedUser,
)
from .profiles import ProfileProvisioner

app = FastAPI()
install_handlers(app)


@app.on_event("startup")
async def on_app_startup():
    # load config to check that all envvars are defined
    get_config()


async def get_client() -> AsyncIterator[AppwriteClient]:
    async with AppwriteClient.from_config(get_config()) as client:
        yield client


@app.post(
    "/",
    status_code=201,
    response_model=ProvisionedUser,
    response_model_by_alias=True,
)
async def create_user(
    request: Request, client: AppwriteClient = Depends(get_client)
) -> ProvisionedUser:
    """Create a user account with its profile, group membership and role."""
    r = CreateUserRequest.parse(await read_payload(request))
    return await ProfileProvisioner(client, get_config()).create_user_with_profile(r)


@app.post(
    "/ensure-profile",
    response_model=EnsuredProfile,
    response_model_by_alias=True,
)
async def ensure_profile(
    request: Request,
    response: Response,
    client: AppwriteClient = Depends(get_client),
) -> EnsuredProfile:
    """Get the profile of an existing account, creating it if missing."""
    r = EnsureProfileRequest.parse(await read_payload(request))
    result = await ProfileProvisioner(client, get_config()).ensure_profile(r)
    response.status_code = 201 if result.created else 200
    return result
