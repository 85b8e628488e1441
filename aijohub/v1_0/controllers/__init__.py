from .supplier_list_controller import SupplierListController
from .supplier_form_controller import SupplierFormController
from .app_shell import AppShell
__all__ = [
    "SupplierListController",
    "SupplierFormController",
    "AppShell",
]
