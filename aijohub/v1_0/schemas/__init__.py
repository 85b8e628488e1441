from .auth_schema import LoginIn, TokenOut
from .supplier_schema import SupplierCreate, SupplierUpdate, SupplierSearch
__all__ = [
    "LoginIn", "TokenOut",
    "SupplierCreate", "SupplierUpdate", "SupplierSearch",
]
