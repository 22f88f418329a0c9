"""
Shared schema base - camelCase on the wire, snake_case in Python
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every request/response schema"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
