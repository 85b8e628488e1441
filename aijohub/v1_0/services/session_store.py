from typing import Optional

from pydantic import ValidationError

from aijohub.core.errors import AuthError, ErrorKind
from aijohub.core.logger import logger
from aijohub.storage.session_storage import KeyValueStore
from aijohub.v1_0.entities import SessionDTO
from aijohub.v1_0.schemas import LoginIn
from .api_client import ApiClient


class SessionStore:
    """
    Sole owner of the authenticated session.

    Holds at most one session and mirrors it into a key-value store under two
    keys (token, username) that are written and cleared together.
    """

    def __init__(
        self,
        api_client: ApiClient,
        store: KeyValueStore,
        token_key: str = "aijoHubToken",
        user_key: str = "aijoHubUser",
    ) -> None:
        self.api_client = api_client
        self.store = store
        self.token_key = token_key
        self.user_key = user_key
        self._current: Optional[SessionDTO] = None

    @property
    def current(self) -> Optional[SessionDTO]:
        return self._current

    def restore(self) -> Optional[SessionDTO]:
        """
        Load a previously persisted session.

        The token is not checked against the backend; an expired token only
        shows up on the next API call.
        """
        token = self.store.get(self.token_key)
        username = self.store.get(self.user_key)
        if not token or not username:
            self._current = None
            return None
        self._current = SessionDTO(token=token, username=username)
        logger.debug("[SessionStore] restored session user=%s", username)
        return self._current

    async def login(self, username: str, password: str) -> SessionDTO:
        """
        Authenticate and persist the resulting session.

        Raises:
            AuthError: Blank credentials (no request is made) or a backend
                rejection. Nothing is persisted in either case.
        """
        try:
            creds = LoginIn(username=username, password=password)
        except ValidationError as e:
            raise AuthError("Username dan password wajib diisi.", kind=ErrorKind.PAYLOAD) from e

        token = await self.api_client.login(creds.username, creds.password)

        session = SessionDTO(token=token, username=creds.username)
        self.store.set(self.token_key, session.token)
        self.store.set(self.user_key, session.username)
        self._current = session
        logger.info("[SessionStore] login ok user=%s", session.username)
        return session

    def logout(self) -> None:
        user = self._current.username if self._current else None
        self.store.delete(self.token_key)
        self.store.delete(self.user_key)
        self._current = None
        logger.info("[SessionStore] logout user=%s", user)
