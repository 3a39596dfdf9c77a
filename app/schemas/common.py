"""
Shared schema base: camelCase JSON keys on the wire, snake_case in Python.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        """Dump with camelCase keys and JSON-safe values"""
        return self.model_dump(by_alias=True, mode="json")
