from typing import Any, Dict, Literal, Mapping, TypedDict, Union

from typing_extensions import NotRequired

# "true" is accepted by the engine as well, e.g. for the open-ended migrationVersion object
DynamicSetting = Union[Literal["strict", "true"], bool, None]


class FieldMapping(TypedDict, total=False):
    """
    An Elasticsearch field mapping. Apart from the keys below, a field can carry
    any engine specific attribute (analyzer, ignore_above, ...). These are treated
    as opaque data, but they are part of the property hash.
        - properties: sub-fields of an object or nested field
        - fields: multi-fields (e.g. a keyword version of a text field)
    """

    type: str
    dynamic: DynamicSetting
    properties: Dict[str, "FieldMapping"]
    fields: Dict[str, "FieldMapping"]


# A registered type contributes one root property, named after the type.
TypeMappingDefinition = FieldMapping
TypeMappingDefinitions = Mapping[str, TypeMappingDefinition]

MappingProperties = Dict[str, FieldMapping]


class MappingMeta(TypedDict, total=False):
    migrationMappingPropertyHashes: Dict[str, str]


class IndexMapping(TypedDict):
    dynamic: NotRequired[DynamicSetting]
    properties: MappingProperties
    _meta: NotRequired[MappingMeta]


# Helper functions to create fields without too much boilerplate


def keyword_field(**attributes: Any) -> FieldMapping:
    return {"type": "keyword", **attributes}  # type: ignore[typeddict-item]


def object_field(**properties: FieldMapping) -> FieldMapping:
    return {"properties": properties}


def nested_field(**properties: FieldMapping) -> FieldMapping:
    return {"type": "nested", "properties": properties}
