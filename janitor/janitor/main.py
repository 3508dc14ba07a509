from typing import AsyncIterator

from fastapi import Depends, FastAPI
from mycad_core.appwrite import AppwriteClient

from .cleanup import CleanupResult, OrphanFileCleaner
from .config import get_config
from .exceptions import install_handlers

app = FastAPI()
install_handlers(app)


async def get_client() -> AsyncIterator[AppwriteClient]:
    async with AppwriteClient.from_config(get_config()) as client:
        yield client


@app.post("/", response_model=CleanupResult, response_model_by_alias=True)
async def cleanup(client: AppwriteClient = Depends(get_client)) -> CleanupResult:
    """Run one cleanup pass over the vehicles bucket."""
    return await OrphanFileCleaner(client, get_config()).run()
