"""Shared base for API contracts."""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Contract base: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def as_number(value: Optional[Decimal]) -> Optional[Union[int, float]]:
    """Render a Decimal as a JSON number, keeping integral values integral."""
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)
