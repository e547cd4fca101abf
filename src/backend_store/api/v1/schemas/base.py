from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class ModelDTO(BaseModel):
    """
    Wire representation of one ORM model.

    `to_model()` builds a transient ORM instance (server-managed timestamps are
    dropped, unset fields are left to column defaults); `from_model()` reads
    attributes straight from an ORM instance.

    With `for_create=True` the id and version are dropped too: the database
    assigns the id and every new row starts at version 1.
    """

    model_config = ConfigDict(from_attributes=True)

    orm_model: ClassVar[type]
    read_only: ClassVar[frozenset[str]] = frozenset({"created_at", "updated_at"})
    create_only_excluded: ClassVar[frozenset[str]] = frozenset({"id", "version"})

    def to_model(self, *, for_create: bool = False) -> Any:
        exclude = set(self.read_only)
        if for_create:
            exclude |= self.create_only_excluded
        return self.orm_model(**self.model_dump(exclude=exclude, exclude_none=True))

    @classmethod
    def from_model(cls, model: Any):
        return cls.model_validate(model)
