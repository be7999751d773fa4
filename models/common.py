from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Union

# Device readings arrive as either ints or floats; keep whichever was sent
Number = Union[int, float]


class CamelModel(BaseModel):
    """Base for documents stored and served with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
