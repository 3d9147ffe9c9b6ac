"""Output stores for generated schema documents."""

from .writer import SchemaWriter, WriteFailure

__all__ = ["SchemaWriter", "WriteFailure"]
