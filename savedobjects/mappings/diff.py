import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from savedobjects.mappings.types import IndexMapping


class MappingDiff(BaseModel):
    """The first difference between a stored mapping and the active mapping"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # '_meta', 'dynamic' or 'properties.<name>'
    changed_prop: str = Field(alias="changedProp")


def diff_mappings(actual: IndexMapping | Mapping[str, Any], expected: IndexMapping) -> MappingDiff | None:
    """
    Check whether the stored (actual) mapping of an index differs from the expected mapping.

    Only the property hashes in _meta and the root dynamic setting are compared, the
    properties themselves are not: the hashes are the fingerprint of the field mappings.
    Properties that exist in the actual mapping but not in the expected mapping are fine.
    An actual mapping without hashes (e.g. written by an older version) is always different.

    :return: The first changed property, or None if the index does not need to be migrated
    """
    changed_prop = _find_changed_prop(actual, expected)
    if changed_prop is None:
        return None
    logging.info(f"Mapping differs from the active mapping at {changed_prop}")
    return MappingDiff(changed_prop=changed_prop)


def _find_changed_prop(actual: Mapping[str, Any], expected: Mapping[str, Any]) -> str | None:
    # _meta is free-form in the engine, so anything other than a mapping counts as missing
    meta = actual.get("_meta")
    if not isinstance(meta, Mapping):
        return "_meta"
    actual_hashes = meta.get("migrationMappingPropertyHashes")
    if not isinstance(actual_hashes, Mapping):
        return "_meta"

    expected_hashes = (expected.get("_meta") or {}).get("migrationMappingPropertyHashes") or {}
    for name, expected_hash in expected_hashes.items():
        if actual_hashes.get(name) != expected_hash:
            return f"properties.{name}"

    if not _same_dynamic(actual.get("dynamic"), expected.get("dynamic")):
        return "dynamic"
    return None


def _same_dynamic(a: Any, b: Any) -> bool:
    # False == 0 and True == 1 in python, but they are different settings
    return type(a) is type(b) and a == b
