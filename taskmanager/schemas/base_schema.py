# taskmanager/schemas/base_schema.py
from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """基础Schema类"""

    model_config = ConfigDict(
        use_enum_values=True,
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )
