from functools import lru_cache
from helpers.backend_client import BackendClient


@lru_cache()
def get_backend_client() -> BackendClient:
    """
    Shared upstream client (one pooled requests.Session per process).
    Overridden in tests through `app.dependency_overrides`.
    """
    return BackendClient()
