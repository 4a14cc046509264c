"""
Base schemas and mixins for all models.

The storefront and admin portal speak camelCase JSON (remainingSlots,
firstAvailableDate, ...). Schemas use snake_case attributes with camelCase
aliases; either form is accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
        - camelCase aliases, populate by either name
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ListResponse(BaseSchema):
    """Offset-based list wrapper used by the admin portal."""
    total: int
    limit: int
    skip: int

