from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator, validate_email

class SupplierCreate(BaseModel):
    """
    Input schema to create a supplier (POST /api/supplier-kain).

    Validators only check; values go to the backend exactly as typed.
    """
    nama: str = Field(..., min_length=1)
    alamat: str = Field(..., min_length=1)
    telepon: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    npwp: str = Field(..., min_length=1)
    model_config = {
        "json_schema_extra": {
            "example": {
                "nama": "CV Kain Makmur",
                "alamat": "Jl. Cigondewah No. 12, Bandung",
                "telepon": "022-5401234",
                "email": "sales@kainmakmur.co.id",
                "npwp": "01.234.567.8-429.000",
            }
        },
    }

    @field_validator("nama", "alamat", "telepon", "email", "npwp")
    @classmethod
    def _not_blank(cls, v: str, info):
        if not v.strip():
            raise ValueError(f"{info.field_name} wajib diisi")
        return v

    @field_validator("email")
    @classmethod
    def _email_syntax(cls, v: str) -> str:
        validate_email(v.strip())
        return v

class SupplierUpdate(SupplierCreate):
    """Full-record update (PUT /api/supplier-kain/{id}); never partial."""
    id: str = Field(..., min_length=1)

class SupplierSearch(BaseModel):
    """Substring filter; None/'' means no constraint on that field."""
    nama: Optional[str] = None
    alamat: Optional[str] = None
    telepon: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        # all three keys always sent, empty when unset
        return {
            "nama": self.nama or "",
            "alamat": self.alamat or "",
            "telepon": self.telepon or "",
        }

    @property
    def is_empty(self) -> bool:
        return not any(self.to_params().values())
