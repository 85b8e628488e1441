from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Tuple, Union

from aijohub.core.errors import ApiError, FormValidationError
from .supplier_DTO import SupplierDTO

# ---- list ----

@dataclass(frozen=True, slots=True)
class Loading:
    pass

@dataclass(frozen=True, slots=True)
class Loaded:
    items: Tuple[SupplierDTO, ...] = ()

@dataclass(frozen=True, slots=True)
class Failed:
    message: str
    error: Optional[BaseException] = None

ListState = Union[Loading, Loaded, Failed]

# ---- form ----

class FormMode(StrEnum):
    ADD = "add"
    EDIT = "edit"

@dataclass(frozen=True, slots=True)
class Closed:
    pass

@dataclass(frozen=True, slots=True)
class Editing:
    """Open modal. `error` is the last save/validation failure, shown inline."""
    mode: FormMode
    draft: SupplierDTO
    error: Optional[Union[ApiError, FormValidationError]] = None
    submitting: bool = False

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

FormState = Union[Closed, Editing]
