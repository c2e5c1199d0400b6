"""Validators shared by the update schemas."""

from pydantic import BaseModel


def reject_explicit_nulls(model: BaseModel, nullable: tuple[str, ...] = ()) -> None:
    """Raise if a field the client sent as null has a non-nullable column behind it.

    Omitted fields are left alone; only fields present in the payload are checked.
    """
    for name in sorted(model.model_fields_set):
        if name not in nullable and getattr(model, name) is None:
            raise ValueError(f"{name} must not be null")
