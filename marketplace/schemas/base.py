"""
Shared pydantic configuration: camelCase on the wire, snake_case in Python
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def changes(self):
        """Fields explicitly present in the request body, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


def check_length(value: Optional[str], low: int, high: int, message: str):
    if value is not None and not (low <= len(value) <= high):
        raise ValueError(message)
    return value
