from src.pipeline.grouper import group_resources
from src.pipeline.normalizer import (
    CATALOG_SCHEMA,
    EXTERNAL_SCHEMA,
    INTERNAL_SCHEMA,
    looks_like_url,
    normalize,
    normalize_rows,
)
from src.utils.resource_models import ResourceType


def test_internal_row_maps_category_and_extras():
    raw = {
        "Category": "Funding",
        "Name": "Acme Grant",
        "Description": "desc",
        "Link": "https://acme.example/grant",
        "Eligibility": "Students",
        "Important Dates": "May 1",
        "Stage": "",
    }

    resource = normalize(raw, INTERNAL_SCHEMA)

    assert resource is not None
    assert resource.category == "Funding"
    assert resource.type is ResourceType.INTERNAL
    assert resource.eligibility == "Students"
    assert resource.important_dates == "May 1"
    assert resource.stage is None
    assert resource.to_dict()["importantDates"] == "May 1"
    assert "stage" not in resource.to_dict()


def test_external_row_uses_resource_type_column():
    raw = {"Resource Type": "Accelerator", "Name": "Launchpad", "Description": None}

    resource = normalize(raw, EXTERNAL_SCHEMA)

    assert resource is not None
    assert resource.category == "Accelerator"
    assert resource.type is ResourceType.EXTERNAL
    assert resource.description == ""
    assert resource.link == "#"


def test_catalog_rows_carry_parent_and_sub_items():
    raw = {"Category": "Programs", "Name": "Incubator", "Parent item": "Labs", "Sub-item": "Cohort A"}

    resource = normalize(raw, CATALOG_SCHEMA)

    assert resource is not None
    assert resource.parent_item == "Labs"
    assert resource.sub_item == "Cohort A"


def test_rows_without_grouping_key_or_name_are_rejected():
    assert normalize({"Category": "", "Name": "Bad Row"}, INTERNAL_SCHEMA) is None
    assert normalize({"Category": "   ", "Name": "Bad Row"}, INTERNAL_SCHEMA) is None
    assert normalize({"Name": "No Category"}, INTERNAL_SCHEMA) is None
    assert normalize({"Category": "Funding", "Name": ""}, INTERNAL_SCHEMA) is None
    # The internal column name does not apply to the external source.
    assert normalize({"Category": "Funding", "Name": "X"}, EXTERNAL_SCHEMA) is None


def test_url_like_names_are_rejected():
    for name in ["https://x.io", "www.spam.net", "spam.com", "Group.ORG", "school.edu", "http"]:
        assert looks_like_url(name)
        assert normalize({"Category": "Funding", "Name": name}, INTERNAL_SCHEMA) is None

    assert not looks_like_url("Acme Grant")


def test_url_heuristic_has_known_false_positives():
    assert normalize({"Category": "Funding", "Name": "www.org initiative"}, INTERNAL_SCHEMA) is None


def test_scenario_drops_blank_category_and_url_names():
    rows = [
        {"Category": "Funding", "Name": "Acme Grant", "Description": "desc"},
        {"Category": "", "Name": "Bad Row"},
        {"Category": "Funding", "Name": "www.spam.com", "Description": "x"},
    ]

    groups = group_resources(normalize_rows(rows, INTERNAL_SCHEMA))

    assert [group.key for group in groups] == ["Funding"]
    assert [item.name for item in groups[0].items] == ["Acme Grant"]


def test_normalize_rows_keeps_input_order():
    rows = [
        {"Category": "B", "Name": "second"},
        {"Category": "A", "Name": "first"},
        {"Category": "B", "Name": "third"},
    ]

    names = [resource.name for resource in normalize_rows(rows, INTERNAL_SCHEMA)]

    assert names == ["second", "first", "third"]


def test_normalized_names_never_look_like_urls():
    rows = [
        {"Category": "C", "Name": name}
        for name in ["Good", "HTTP Guide", "Site.Com", "Plain", "x.edu", "www.y"]
    ]

    names = [resource.name for resource in normalize_rows(rows, INTERNAL_SCHEMA)]

    assert names == ["Good", "Plain"]
