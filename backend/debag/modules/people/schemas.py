# debag/modules/people/schemas.py
from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime

from debag.shared.schemas import CamelModel

NAME_OR_CODE_REQUIRED = "Either name or employee code is required."


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class PersonCreateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    employee_code: Optional[str] = Field(None, min_length=1, max_length=50)
    active: bool = True

    @field_validator("name", "employee_code", mode="before")
    @classmethod
    def _trim(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def _name_or_code(self):
        if not (self.name or self.employee_code):
            raise ValueError(NAME_OR_CODE_REQUIRED)
        return self


class PersonOut(CamelModel):
    id: int
    name: Optional[str] = None
    employee_code: Optional[str] = None
    active: bool
    created_at: datetime
