"""Shared pydantic base for the public JSON contract (camelCase on the wire)."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Money leaves the service as a JSON number with two decimals
MoneyOut = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
