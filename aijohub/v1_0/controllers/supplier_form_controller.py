from dataclasses import replace
from typing import Any, Awaitable, Callable, List, Optional, Union

from pydantic import ValidationError

from aijohub.core.errors import FormValidationError, SaveError
from aijohub.core.logger import logger
from aijohub.v1_0.entities import Closed, Editing, FormMode, FormState, SupplierDTO
from aijohub.v1_0.schemas import SupplierCreate, SupplierUpdate
from aijohub.v1_0.services import ApiClient

Listener = Callable[[FormState], None]
SavedCallback = Callable[[SupplierDTO], Awaitable[None]]


class SupplierFormController:
    """
    Add/edit modal for a single supplier.

    The draft is a frozen copy, so edits never reach the row shown in the
    list. Save failures stay on the open modal as `Editing.error`.
    """

    def __init__(
        self,
        api_client: ApiClient,
        token: str,
        on_saved: Optional[SavedCallback] = None,
    ) -> None:
        self.api_client = api_client
        self.token = token
        self.on_saved = on_saved
        self._state: FormState = Closed()
        # bumped on every open/close; a reply for an older modal is not applied
        self._opened = 0
        self._listeners: List[Listener] = []

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def is_open(self) -> bool:
        return isinstance(self._state, Editing)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set(self, state: FormState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _require_editing(self, op: str) -> Editing:
        if not isinstance(self._state, Editing):
            raise RuntimeError(f"{op}() called while the supplier form is closed")
        return self._state

    # ---------- lifecycle ----------

    def open_add(self) -> Editing:
        self._opened += 1
        self._set(Editing(mode=FormMode.ADD, draft=SupplierDTO()))
        return self._state

    def open_edit(self, record: SupplierDTO) -> Editing:
        if not record.id:
            raise ValueError("cannot edit a supplier that has no id")
        self._opened += 1
        self._set(Editing(mode=FormMode.EDIT, draft=replace(record)))
        return self._state

    def set_field(self, name: str, value: Any) -> Editing:
        st = self._require_editing("set_field")
        if st.submitting:
            raise RuntimeError("set_field() called while a save is in flight")
        if name not in SupplierDTO.editable_fields():
            raise ValueError(f"unknown or read-only supplier field: {name!r}")
        draft = replace(st.draft, **{name: "" if value is None else str(value)})
        self._set(replace(st, draft=draft, error=None))
        return self._state

    def close(self) -> None:
        self._opened += 1
        self._set(Closed())

    # ---------- submit ----------

    @staticmethod
    def validate(st: Editing) -> Union[SupplierCreate, SupplierUpdate]:
        """
        Required-field check for the draft.

        Raises:
            FormValidationError: Listing every offending field.
        """
        data = st.draft.to_dict()
        try:
            if st.mode is FormMode.ADD:
                data.pop("id", None)
                return SupplierCreate(**data)
            return SupplierUpdate(**data)
        except ValidationError as e:
            fields = {}
            for err in e.errors():
                loc = err.get("loc") or ("draft",)
                fields.setdefault(str(loc[0]), err.get("msg", "invalid"))
            raise FormValidationError(fields) from e

    async def submit(self) -> Optional[SupplierDTO]:
        """
        Validate then create/update the draft.

        Returns:
            The saved record, or None when validation or the save failed. The
            failure is kept on `state.error` and the draft is left intact.

        Raises:
            RuntimeError: If the form is closed.
        """
        st = self._require_editing("submit")
        if st.submitting:
            logger.warning("[SupplierFormController] submit ignored, save already in flight")
            return None

        try:
            payload = self.validate(st)
        except FormValidationError as e:
            logger.warning("[SupplierFormController] validation rejected fields=%s", sorted(e.fields))
            self._set(replace(st, error=e))
            return None

        opened = self._opened
        self._set(replace(st, error=None, submitting=True))
        try:
            if st.mode is FormMode.ADD:
                saved = await self.api_client.create(self.token, payload)
            else:
                saved = await self.api_client.update(self.token, st.draft.id, payload)
        except SaveError as e:
            logger.warning("[SupplierFormController] %s failed: %r", st.mode.value, e)
            self._settle(opened, error=e)
            return None
        except BaseException:
            self._settle(opened, error=None)
            raise

        logger.info("[SupplierFormController] %s ok id=%s", st.mode.value, saved.id)
        if opened == self._opened:
            self.close()
        if self.on_saved is not None:
            await self.on_saved(saved)
        return saved

    def _settle(self, opened: int, error: Optional[SaveError]) -> None:
        if opened != self._opened or not isinstance(self._state, Editing):
            logger.debug("[SupplierFormController] result for a closed modal dropped")
            return
        self._set(replace(self._state, error=error, submitting=False))
