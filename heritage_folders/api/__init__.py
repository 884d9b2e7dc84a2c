"""API layer: DTOs, mappers and error kinds."""
