from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class with a storage-assigned integer identifier."""

    id: int | None = PydanticField(
        default=None,
        description="Identifier assigned by storage on insert; immutable afterwards",
    )


class EntityTable(SQLModel, table=False):
    """Base table class with an autoincrement integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Identifier assigned by the database on insert",
    )
