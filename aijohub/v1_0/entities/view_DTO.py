from dataclasses import dataclass
from typing import Optional, Union

from .state_DTO import FormState, ListState

@dataclass(frozen=True)
class LoginView:
    error: Optional[str] = None
    loading: bool = False

@dataclass(frozen=True)
class DashboardView:
    username: str
    suppliers: ListState
    form: FormState

ShellView = Union[LoginView, DashboardView]
