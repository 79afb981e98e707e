from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, Optional, TypeVar

ModelT = TypeVar("ModelT", bound="BaseGolfModel")


class BaseGolfModel(BaseModel):
    """Shared configuration and methods."""
    model_config = ConfigDict(validate_assignment=True)

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with user correction. Returns error message if validation fails."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']

    def with_updates(self: ModelT, **changes: Any) -> ModelT:
        """Return a re-validated copy with ``changes`` applied. The original is untouched."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)
