from typing import Awaitable, Callable, List, Optional, Tuple

from aijohub.core.errors import FetchError
from aijohub.core.logger import logger
from aijohub.v1_0.entities import Failed, ListState, Loaded, Loading, SupplierDTO
from aijohub.v1_0.schemas import SupplierSearch
from aijohub.v1_0.services import ApiClient

Listener = Callable[[ListState], None]


class SupplierListController:
    """
    Owns the supplier table: its rows and its loading/error state.

    Each fetch or search takes a new generation number when it starts. A
    response is applied only if its generation is still the latest, so a slow
    reply never overwrites the result of a request issued after it.
    """

    def __init__(self, api_client: ApiClient, token: str) -> None:
        self.api_client = api_client
        self.token = token
        # dashboard fetches on mount
        self._state: ListState = Loading()
        self._generation = 0
        self._active_filter: Optional[SupplierSearch] = None
        self._listeners: List[Listener] = []

    # ---------- read side ----------

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def items(self) -> Tuple[SupplierDTO, ...]:
        return self._state.items if isinstance(self._state, Loaded) else ()

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def error(self) -> Optional[str]:
        return self._state.message if isinstance(self._state, Failed) else None

    @property
    def active_filter(self) -> Optional[SupplierSearch]:
        return self._active_filter

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set(self, state: ListState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # ---------- operations ----------

    async def fetch_all(self) -> ListState:
        self._active_filter = None
        return await self._run("fetch_all", lambda: self.api_client.list_all(self.token))

    async def search(self, filter: SupplierSearch) -> ListState:
        filter = filter.model_copy()
        self._active_filter = filter
        return await self._run("search", lambda: self.api_client.search(self.token, filter))

    async def reset(self) -> ListState:
        return await self.fetch_all()

    async def refresh(self) -> ListState:
        """Re-run whatever produced the current rows, keeping an active search."""
        if self._active_filter is not None:
            return await self.search(self._active_filter)
        return await self.fetch_all()

    async def _run(self, label: str, call: Callable[[], Awaitable[List[SupplierDTO]]]) -> ListState:
        self._generation += 1
        gen = self._generation
        logger.debug("[SupplierListController] %s start gen=%s", label, gen)
        self._set(Loading())
        try:
            rows = await call()
        except FetchError as e:
            if self._is_latest(label, gen):
                self._set(Failed(e.message, e))
        except Exception as e:
            logger.error("[SupplierListController] %s failed: %s", label, e, exc_info=True)
            if self._is_latest(label, gen):
                self._set(Failed("Gagal memuat data supplier.", e))
            raise
        else:
            if self._is_latest(label, gen):
                self._set(Loaded(tuple(rows)))
                logger.debug("[SupplierListController] %s loaded rows=%s", label, len(rows))
        finally:
            # only reachable in Loading when the call was cancelled
            if gen == self._generation and isinstance(self._state, Loading):
                self._set(Failed("Permintaan dibatalkan."))
        return self._state

    def _is_latest(self, label: str, gen: int) -> bool:
        if gen == self._generation:
            return True
        logger.warning(
            "[SupplierListController] stale %s response discarded gen=%s latest=%s",
            label,
            gen,
            self._generation,
        )
        return False
