from typing import ClassVar
from pydantic import BaseModel


class PartialUpdate(BaseModel):
    """
    Base for PATCH bodies.

    Omitted fields are left alone. An explicit null clears a field only if
    it is listed in `clearable`; for required columns a null is ignored.
    """

    clearable: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict:
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field in self.clearable
        }
