"""
Root properties that every saved objects index carries, regardless of which types
are registered, and the optional fields that are only added behind a feature flag.

Changing anything here changes the property hash of that field, and thus
triggers a migration of every existing index.
"""

from savedobjects.mappings.types import MappingProperties, keyword_field, nested_field, object_field

CORE_PROPERTIES: MappingProperties = dict(
    migrationVersion={"dynamic": "true", "type": "object"},
    type=keyword_field(),
    namespace=keyword_field(),
    namespaces=keyword_field(),
    originId=keyword_field(),
    updated_at={"type": "date"},
    references=nested_field(
        name=keyword_field(),
        type=keyword_field(),
        id=keyword_field(),
    ),
)

_principals = object_field(
    users=keyword_field(),
    groups=keyword_field(),
)

PERMISSIONS_PROPERTIES: MappingProperties = dict(
    permissions=object_field(
        library_read=_principals,
        library_write=_principals,
        read=_principals,
        write=_principals,
    ),
)

WORKSPACES_PROPERTIES: MappingProperties = dict(
    workspaces=keyword_field(),
)


def is_core_property(name: str) -> bool:
    """Is this root property owned by the index itself rather than by a registered type?"""
    return name in CORE_PROPERTIES or name in PERMISSIONS_PROPERTIES or name in WORKSPACES_PROPERTIES
