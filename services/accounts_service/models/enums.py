"""Enum definitions for accounts service models."""

from libs.auth.models import Role


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


__all__ = ["Role", "enum_values"]
