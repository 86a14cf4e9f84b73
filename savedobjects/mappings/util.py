from typing import Any, Mapping

from savedobjects.mappings.core import is_core_property
from savedobjects.mappings.types import FieldMapping, IndexMapping, MappingProperties

OMITTED_ROOT_PROPERTIES = ("migrationVersion", "references")


def get_root_properties(mapping: IndexMapping | Mapping[str, Any]) -> MappingProperties:
    """Get the root properties of a mapping. Raises a ValueError if the mapping has none"""
    properties = mapping.get("properties")
    if properties is None:
        raise ValueError("Unable to get root properties of a mapping without properties")
    return properties


def get_root_properties_objects(mapping: IndexMapping | Mapping[str, Any]) -> MappingProperties:
    """
    Get the root properties that are objects, i.e. that have sub-properties or are of type object.
    The bookkeeping properties migrationVersion and references are left out.
    """
    return {
        name: field
        for name, field in get_root_properties(mapping).items()
        if name not in OMITTED_ROOT_PROPERTIES and ("properties" in field or field.get("type") == "object")
    }


def get_types(mapping: IndexMapping | Mapping[str, Any]) -> list[str]:
    """Get the names of the registered types in a mapping (i.e. everything except the core properties)"""
    return [name for name in get_root_properties(mapping) if not is_core_property(name)]


def get_property(mapping: IndexMapping | Mapping[str, Any], path: str | list[str]) -> FieldMapping | None:
    """
    Get the mapping of a (nested) field by its dotted path, e.g. "references.id".
    Multi-fields are found as well, e.g. "title.raw" for a keyword multi-field of title.
    """
    segments = path.split(".") if isinstance(path, str) else list(path)
    if not segments:
        return None

    field: Mapping[str, Any] = mapping
    for segment in segments:
        children = field.get("properties") or field.get("fields") or {}
        if segment not in children:
            return None
        field = children[segment]
    return field  # type: ignore[return-value]
