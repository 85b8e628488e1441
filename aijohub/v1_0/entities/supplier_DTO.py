from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Tuple

from aijohub.v1_0.helper.normalizers import normalize_row

@dataclass(frozen=True, slots=True)
class SupplierDTO:
    """Fabric supplier row as served by /api/supplier-kain. Empty id = not created yet."""
    id: str = ""
    nama: str = ""
    alamat: str = ""
    telepon: str = ""
    email: str = ""
    npwp: str = ""

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def editable_fields(cls) -> Tuple[str, ...]:
        return tuple(n for n in cls.field_names() if n != "id")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SupplierDTO":
        return cls(**normalize_row(d, cls.field_names()))

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
