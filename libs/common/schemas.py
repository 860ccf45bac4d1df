"""Base schema for the storage/API naming boundary.

Columns and ORM attributes are snake_case; the JSON API is camelCase. Every
entity schema inherits from ``CamelModel`` so the rename happens here and
nowhere else.
"""

from pydantic import BaseModel, ConfigDict


def to_camel(name: str) -> str:
    """``b2c_price`` -> ``b2cPrice``.

    Only the first letter after each underscore is upper-cased, so letters
    following a digit inside a segment stay as written.
    """
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_columns(self, *, exclude_unset: bool = False) -> dict:
        """Dump with attribute (snake_case) names for writing to the ORM."""
        return self.model_dump(by_alias=False, exclude_unset=exclude_unset)
