"""
Build the active mapping of the saved objects index.

The mapping is the combination of the core properties, one root property per
registered type (named after the type), and the feature-gated properties. Each
root property also gets a hash of its mapping in _meta, which is what we use
to decide whether an existing index needs to be migrated (see diff.py).
"""

import copy
import hashlib
import json
import logging
from typing import Any, Mapping

from savedobjects.config import PERMISSION_FLAG, WORKSPACE_FLAG, FeatureFlags
from savedobjects.mappings.core import CORE_PROPERTIES, PERMISSIONS_PROPERTIES, WORKSPACES_PROPERTIES
from savedobjects.mappings.types import FieldMapping, IndexMapping, MappingProperties, TypeMappingDefinitions

RESERVED_PREFIX = "_"


class MappingError(ValueError):
    pass


class DuplicateMappingError(MappingError):
    pass


class InvalidMappingNameError(MappingError):
    pass


def build_active_mappings(
    type_definitions: TypeMappingDefinitions, feature_flags: FeatureFlags | None = None
) -> IndexMapping:
    """
    Create the strict mapping for the saved objects index.

    :param type_definitions: The mapping of each registered type, keyed by type name.
                             The type name becomes the root property holding its mapping.
    :param feature_flags: Optional lookup for the 'permissions' and 'workspaces' flags.
                          Without it, both are off.
    :return: A new mapping, sharing no objects with the inputs.
    """
    properties = validate_and_merge(copy.deepcopy(CORE_PROPERTIES), type_definitions)

    if feature_flags is not None and feature_flags(PERMISSION_FLAG):
        properties = validate_and_merge(properties, PERMISSIONS_PROPERTIES)
    if feature_flags is not None and feature_flags(WORKSPACE_FLAG):
        properties = validate_and_merge(properties, WORKSPACES_PROPERTIES)

    for name, definition in type_definitions.items():
        if "dynamic" in definition:
            logging.debug(f"Type {name} declares dynamic={definition['dynamic']!r}")

    return {
        "dynamic": "strict",
        "properties": properties,
        "_meta": {"migrationMappingPropertyHashes": property_hashes(properties)},
    }


def validate_and_merge(dest: MappingProperties, source: Mapping[str, FieldMapping]) -> MappingProperties:
    """
    Add the root properties in source to dest (in place), refusing to overwrite existing
    properties or to add properties with a reserved name.
    """
    for name, mapping in source.items():
        if name in dest:
            raise DuplicateMappingError(f'Cannot redefine core mapping "{name}".')
        if name.startswith(RESERVED_PREFIX):
            raise InvalidMappingNameError(f'Invalid mapping "{name}". Mappings cannot start with {RESERVED_PREFIX}.')
        dest[name] = copy.deepcopy(mapping)
    return dest


def property_hashes(properties: Mapping[str, FieldMapping]) -> dict[str, str]:
    """Hash every root property separately, in the order of the properties"""
    return {name: property_hash(mapping) for name, mapping in properties.items()}


def property_hash(mapping: Any) -> str:
    """
    A stable hash of a field mapping. The hash does not depend on the order of keys
    anywhere in the mapping, but any other change in the mapping changes the hash.
    """
    return hashlib.md5(canonical_json(mapping).encode("utf-8"), usedforsecurity=False).hexdigest()


def canonical_json(value: Any) -> str:
    # sort_keys works recursively; fixed separators keep the output identical across versions
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
