"""Tool argument validation and schema generation."""

from .schema_validator import SchemaValidator

__all__ = ["SchemaValidator"]
