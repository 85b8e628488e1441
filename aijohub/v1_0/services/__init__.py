from .api_client import ApiClient
from .session_store import SessionStore
__all__=[
    "ApiClient",
    "SessionStore",
    ]
