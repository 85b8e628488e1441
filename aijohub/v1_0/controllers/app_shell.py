from typing import Callable, Optional

from aijohub.core.errors import AuthError
from aijohub.core.logger import logger
from aijohub.v1_0.entities import DashboardView, LoginView, SessionDTO, ShellView, SupplierDTO
from aijohub.v1_0.services import SessionStore
from .supplier_form_controller import SupplierFormController
from .supplier_list_controller import SupplierListController


class AppShell:
    """
    Top-level composition: login view when there is no session, dashboard otherwise.

    The dashboard's controllers are built per session from the injected
    factories and dropped on logout.
    """

    def __init__(
        self,
        session_store: SessionStore,
        list_controller_factory: Callable[..., SupplierListController],
        form_controller_factory: Callable[..., SupplierFormController],
    ) -> None:
        self.session_store = session_store
        self.list_controller_factory = list_controller_factory
        self.form_controller_factory = form_controller_factory
        self.suppliers: Optional[SupplierListController] = None
        self.form: Optional[SupplierFormController] = None
        self._session: Optional[SessionDTO] = None
        self._login_error: Optional[str] = None
        self._login_pending = False

    @property
    def session(self) -> Optional[SessionDTO]:
        return self._session

    @property
    def view(self) -> ShellView:
        if self._session is None or self.suppliers is None or self.form is None:
            return LoginView(error=self._login_error, loading=self._login_pending)
        return DashboardView(
            username=self._session.username,
            suppliers=self.suppliers.state,
            form=self.form.state,
        )

    async def start(self) -> ShellView:
        session = self.session_store.restore()
        if session is not None:
            await self._mount(session)
        return self.view

    async def login(self, username: str, password: str) -> bool:
        self._login_error = None
        self._login_pending = True
        try:
            session = await self.session_store.login(username, password)
        except AuthError as e:
            logger.warning("[AppShell] login rejected user=%s: %s", username, e.message)
            self._login_error = e.message
            return False
        finally:
            self._login_pending = False
        await self._mount(session)
        return True

    def logout(self) -> None:
        self.session_store.logout()
        self._session = None
        self.suppliers = None
        self.form = None
        self._login_error = None

    async def _mount(self, session: SessionDTO) -> None:
        self._session = session
        self._login_error = None
        self.suppliers = self.list_controller_factory(token=session.token)
        self.form = self.form_controller_factory(token=session.token, on_saved=self._on_saved)
        logger.info("[AppShell] dashboard mounted user=%s", session.username)
        await self.suppliers.fetch_all()

    async def _on_saved(self, record: SupplierDTO) -> None:
        # session may have ended while the save was in flight
        if self.suppliers is None:
            return
        await self.suppliers.refresh()
