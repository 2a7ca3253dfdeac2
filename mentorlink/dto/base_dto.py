from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDto(BaseModel):
    """
    Base class of every response DTO.

    Fields are serialized in camelCase, can still be populated by their Python
    names, and can be built straight from ORM entities (`from_attributes`).
    Cached views are stored by alias and validated back through the same models.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
