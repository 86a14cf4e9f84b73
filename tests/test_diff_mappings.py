from savedobjects.mappings import MappingDiff, build_active_mappings, diff_mappings


def mapping(hashes: dict | None = None, dynamic="strict", properties: dict | None = None, meta: bool = True) -> dict:
    result: dict = {"dynamic": dynamic, "properties": properties or {}}
    if meta:
        result["_meta"] = {} if hashes is None else {"migrationMappingPropertyHashes": hashes}
    return result


def test_different_if_expected_contains_extra_hashes():
    actual = mapping({"foo": "bar"})
    expected = mapping({"foo": "bar", "baz": "qux"})
    assert diff_mappings(actual, expected) == MappingDiff(changed_prop="properties.baz")


def test_nothing_if_actual_contains_extra_hashes():
    actual = mapping({"foo": "bar", "baz": "qux"})
    expected = mapping({"foo": "bar"})
    assert diff_mappings(actual, expected) is None


def test_nothing_if_hashes_identical_but_properties_differ():
    actual = mapping({"foo": "bar"}, properties={"foo": {"type": "keyword"}})
    expected = mapping({"foo": "bar"}, properties={"foo": {"type": "text"}})
    assert diff_mappings(actual, expected) is None


def test_different_if_meta_hashes_change():
    actual = mapping({"foo": "bar"})
    expected = mapping({"foo": "baz"})
    assert diff_mappings(actual, expected).changed_prop == "properties.foo"


def test_reports_first_changed_property_in_expected_order():
    actual = mapping({"a": "1", "b": "2", "c": "3"})
    expected = mapping({"c": "x", "b": "2", "a": "y"})
    assert diff_mappings(actual, expected).changed_prop == "properties.c"


def test_different_if_dynamic_is_different():
    actual = mapping({"foo": "bar"})
    expected = mapping({"foo": "bar"}, dynamic="abcde")
    assert diff_mappings(actual, expected).changed_prop == "dynamic"


def test_dynamic_comparison_is_type_sensitive():
    assert diff_mappings(mapping({}, dynamic=False), mapping({}, dynamic=None)).changed_prop == "dynamic"
    assert diff_mappings(mapping({}, dynamic=False), mapping({}, dynamic=0)).changed_prop == "dynamic"
    assert diff_mappings(mapping({}, dynamic="Strict"), mapping({})).changed_prop == "dynamic"
    assert diff_mappings(mapping({}, dynamic=False), mapping({}, dynamic=False)) is None


def test_missing_dynamic_is_different_from_strict():
    actual = mapping({"foo": "bar"})
    del actual["dynamic"]
    assert diff_mappings(actual, mapping({"foo": "bar"})).changed_prop == "dynamic"


def test_hashes_are_checked_before_dynamic():
    actual = mapping({"foo": "bar"}, dynamic=False)
    expected = mapping({"foo": "baz"})
    assert diff_mappings(actual, expected).changed_prop == "properties.foo"


def test_different_if_migration_hashes_missing_from_actual():
    actual = mapping(meta=True)
    expected = mapping({"foo": "bar"})
    assert diff_mappings(actual, expected).changed_prop == "_meta"


def test_different_if_meta_missing_from_actual():
    actual = mapping(meta=False)
    expected = mapping({"foo": "bar"})
    assert diff_mappings(actual, expected).changed_prop == "_meta"


def test_meta_is_checked_before_dynamic():
    actual = mapping(meta=False, dynamic=False)
    assert diff_mappings(actual, mapping({"foo": "bar"})).changed_prop == "_meta"


def test_none_values_are_missing():
    actual = {"dynamic": "strict", "properties": {}, "_meta": None}
    assert diff_mappings(actual, mapping({})).changed_prop == "_meta"
    actual = {"dynamic": "strict", "properties": {}, "_meta": {"migrationMappingPropertyHashes": None}}
    assert diff_mappings(actual, mapping({})).changed_prop == "_meta"


def test_malformed_meta_is_different():
    expected = build_active_mappings({})
    for meta in ["x", 1, ["migrationMappingPropertyHashes"], True]:
        actual = {"dynamic": "strict", "properties": {}, "_meta": meta}
        assert diff_mappings(actual, expected).changed_prop == "_meta"
    for hashes in ["x", 1, ["type"]]:
        actual = {"dynamic": "strict", "properties": {}, "_meta": {"migrationMappingPropertyHashes": hashes}}
        assert diff_mappings(actual, expected).changed_prop == "_meta"


def test_built_mapping_has_no_diff_with_itself():
    types = {"dashboard": {"properties": {"title": {"type": "text"}}}}
    assert diff_mappings(build_active_mappings(types), build_active_mappings(types)) is None


def test_changed_type_is_detected():
    old = build_active_mappings({"dashboard": {"properties": {"title": {"type": "text"}}}})
    new = build_active_mappings({"dashboard": {"properties": {"title": {"type": "keyword"}}}})
    assert diff_mappings(old, new).changed_prop == "properties.dashboard"


def test_removed_type_is_tolerated():
    old = build_active_mappings({"dashboard": {"type": "text"}, "visualization": {"type": "text"}})
    new = build_active_mappings({"dashboard": {"type": "text"}})
    assert diff_mappings(old, new) is None
    assert diff_mappings(new, old).changed_prop == "properties.visualization"


def test_diff_serializes_with_camel_case_alias():
    diff = MappingDiff(changed_prop="_meta")
    assert diff.model_dump(by_alias=True) == {"changedProp": "_meta"}
    assert MappingDiff(changedProp="dynamic").changed_prop == "dynamic"
