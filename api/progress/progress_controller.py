from typing import Optional
from api.progress.progress_schema import CachedBadge, ProgressView
from api.progress.progress_service import ProgressSession
from helpers.backend_client import BackendClient
from utils.cache_utils import KeyValueStore


def get_my_progress(
    token: Optional[str],
    client: BackendClient,
    store: KeyValueStore,
) -> ProgressView:
    """
    One refresh pass per request. Failures never surface as errors here;
    they degrade to an empty badge and zero progress.
    """
    return ProgressSession(client, store).refresh(token)


def get_my_cached_badge(
    token: Optional[str],
    client: BackendClient,
    store: KeyValueStore,
) -> CachedBadge:
    return ProgressSession(client, store).cached(token)
