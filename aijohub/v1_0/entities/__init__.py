from .auth_DTO import SessionDTO
from .supplier_DTO import SupplierDTO
from .state_DTO import (
    Loading, Loaded, Failed, ListState,
    FormMode, Closed, Editing, FormState,
)
from .view_DTO import LoginView, DashboardView, ShellView


__all__ = [
    "SessionDTO",
    "SupplierDTO",
    "Loading", "Loaded", "Failed", "ListState",
    "FormMode", "Closed", "Editing", "FormState",
    "LoginView", "DashboardView", "ShellView",
]
