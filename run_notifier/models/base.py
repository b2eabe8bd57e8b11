"""Base model configuration for all configuration and payload structures."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Model(BaseModel):
    """Base model with standard configuration.

    Fields are exposed under camelCase aliases so that configuration written
    for the JavaScript reporters can be loaded as-is.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
