from typing import Optional
from fastapi import APIRouter, Depends
from middlewares.auth_middleware import optional_token
from api.progress.progress_controller import get_my_progress, get_my_cached_badge
from api.progress.progress_schema import CachedBadge, ProgressView
from helpers.backend_client import BackendClient
from utils.cache_utils import KeyValueStore, get_store
from utils.deps import get_backend_client

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get(
    "/me",
    response_model=ProgressView,
    summary="Refresh challenge progress and badge for the current user"
)
def read_my_progress(
    token: Optional[str] = Depends(optional_token),
    client: BackendClient = Depends(get_backend_client),
    store: KeyValueStore = Depends(get_store),
):
    return get_my_progress(token, client, store)


@router.get(
    "/me/cached",
    response_model=CachedBadge,
    summary="Last known badge, available before the refresh completes"
)
def read_my_cached_badge(
    token: Optional[str] = Depends(optional_token),
    client: BackendClient = Depends(get_backend_client),
    store: KeyValueStore = Depends(get_store),
):
    return get_my_cached_badge(token, client, store)
