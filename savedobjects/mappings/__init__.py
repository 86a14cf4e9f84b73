"""
The mapping of the saved objects index: building the active mapping from the
registered types, and checking whether a stored mapping is still up to date.
"""

from savedobjects.mappings.build import (
    DuplicateMappingError,
    InvalidMappingNameError,
    MappingError,
    build_active_mappings,
    property_hash,
)
from savedobjects.mappings.diff import MappingDiff, diff_mappings
from savedobjects.mappings.types import FieldMapping, IndexMapping, TypeMappingDefinition, TypeMappingDefinitions

__all__ = [
    "DuplicateMappingError",
    "FieldMapping",
    "IndexMapping",
    "InvalidMappingNameError",
    "MappingDiff",
    "MappingError",
    "TypeMappingDefinition",
    "TypeMappingDefinitions",
    "build_active_mappings",
    "diff_mappings",
    "property_hash",
]
