from typing import Dict, List, Optional
from pydantic import BaseModel

class FieldError(BaseModel):
    field: str
    msg: str

class ErrorResponse(BaseModel):
    """Uniform failure envelope: {success: false, error: <message>}."""
    success: bool = False
    error: str
    errors: Optional[List[FieldError]] = None

    def to_dict(self) -> Dict:
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def fail(cls, message: str, errors: Optional[List[FieldError]] = None) -> "ErrorResponse":
        return cls(error=message, errors=errors)
