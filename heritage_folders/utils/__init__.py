"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .validators import (
    validate_allowed_roles,
    validate_description,
    validate_folder_type,
    validate_move,
    validate_name,
)

__all__ = [
    "validate_allowed_roles",
    "validate_description",
    "validate_folder_type",
    "validate_move",
    "validate_name"
]
