"""
Connection to the Elastic server, and reading the stored mapping of the saved objects index.

This module only reads mappings. Creating indices and migrating documents is
up to the caller, based on the outcome of check_index_mapping.
"""

import logging
from typing import Any

from elasticsearch import AsyncElasticsearch, NotFoundError

from savedobjects.config import FeatureFlags, get_settings
from savedobjects.mappings import MappingDiff, TypeMappingDefinitions, build_active_mappings, diff_mappings


class ESConnectionHolder:
    active: AsyncElasticsearch | None = None


ES_CONNECTION = ESConnectionHolder()


async def elastic_connection() -> AsyncElasticsearch:
    """Get the shared elasticsearch connection, connecting on first use"""
    if ES_CONNECTION.active is None:
        ES_CONNECTION.active = await setup_elastic()
    return ES_CONNECTION.active


async def close_elastic() -> None:
    if ES_CONNECTION.active is not None:
        await ES_CONNECTION.active.close()
        ES_CONNECTION.active = None


async def setup_elastic() -> AsyncElasticsearch:
    settings = get_settings()
    logging.debug(f"Reading mappings from elasticsearch at {settings.elastic_host}")
    elastic = connect_elastic()
    if not await elastic.ping():
        await elastic.close()
        raise ConnectionError(f"Cannot connect to elasticsearch server {settings.elastic_host}")
    return elastic


def connect_elastic() -> AsyncElasticsearch:
    settings = get_settings()
    auth = {"basic_auth": ("elastic", settings.elastic_password)} if settings.elastic_password else {}
    return AsyncElasticsearch(settings.elastic_host, verify_certs=bool(settings.elastic_verify_ssl), **auth)


async def get_index_mapping(index: str, elastic: Any = None) -> dict | None:
    """
    Get the stored mapping of an index, or None if the index does not exist.
    If index is an alias, the mapping of the (first) index behind it is returned.
    """
    if elastic is None:
        elastic = await elastic_connection()
    try:
        response = await elastic.indices.get_mapping(index=index)
    except NotFoundError:
        return None
    return mapping_from_response(dict(response), index)


def mapping_from_response(response: dict, index: str | None = None) -> dict | None:
    """
    Get the mapping from a get_mapping response, which is keyed by index name:
    {index: {"mappings": {...}}}. A bare {"mappings": {...}} document is unwrapped as
    well, and a mapping itself is returned as is.
    If index is not in the response (e.g. an alias), the first index is used.
    """
    if index is not None and isinstance(response.get(index), dict) and "mappings" in response[index]:
        return response[index]["mappings"]
    if not response:
        return None
    if any(key in response for key in ("properties", "_meta", "dynamic")):
        return response
    if "mappings" in response:
        return response["mappings"]
    first = next(iter(response.values()))
    if isinstance(first, dict) and "mappings" in first:
        return first["mappings"]
    return response


async def check_index_mapping(
    index: str,
    type_definitions: TypeMappingDefinitions,
    feature_flags: FeatureFlags | None = None,
    elastic: Any = None,
) -> MappingDiff | None:
    """
    Check whether the stored mapping of an index matches the active mapping for the given types.
    A missing index has no _meta, so it is always reported as different.

    :return: The first changed property, or None if the index does not need to be migrated
    """
    expected = build_active_mappings(type_definitions, feature_flags)
    actual = await get_index_mapping(index, elastic)
    if actual is None:
        logging.info(f"Index {index} does not exist")
        actual = {}

    diff = diff_mappings(actual, expected)
    if diff is None:
        logging.info(f"Mapping of index {index} is up to date")
    else:
        logging.warning(f"Mapping of index {index} is outdated: {diff.changed_prop} changed")
    return diff
