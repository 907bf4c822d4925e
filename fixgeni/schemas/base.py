from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire (isActive, createdAt, ...)."""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
