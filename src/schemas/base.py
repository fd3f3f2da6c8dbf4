"""Base model shared by every API schema.

Fields are declared in snake_case and serialized in camelCase, matching the
JSON contract consumed by the frontend.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
