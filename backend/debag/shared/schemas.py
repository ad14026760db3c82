# debag/shared/schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format is camelCase (personId, bagsTimed…); snake_case is accepted on input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorOut(BaseModel):
    error: str


# Documented error bodies, shared by every gated router
ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    401: {"model": ErrorOut},
}
