import asyncio

from src.main import _parse_search, handle_command


def test_parse_search_splits_options_from_text():
    params = _parse_search(["pitch", "night", "category=Events", "type=internal"])

    assert params.query == "pitch night"
    assert params.category == "Events"
    assert params.type == "internal"


def test_search_command_lists_matches(directory):
    output = asyncio.run(handle_command(directory, "search grant"))

    assert output.splitlines() == [
        "- Acme Grant [internal] (Funding)",
        "- Beta Fund [external] (Grants)",
    ]


def test_fav_command_toggles(directory):
    assert asyncio.run(handle_command(directory, 'fav "Acme Grant"')) == (
        "Added 'Acme Grant' to favorites."
    )
    assert asyncio.run(handle_command(directory, "favorites")) == (
        "* Acme Grant [internal] (Funding)"
    )
    asyncio.run(handle_command(directory, "fav Acme Grant"))
    assert asyncio.run(handle_command(directory, "favorites")) == "No favorites yet."


def test_groups_command_and_unknown_input(directory):
    assert asyncio.run(handle_command(directory, "groups external")) == (
        "Grants (1)\nAccelerators (1)"
    )
    assert "Unknown source" in asyncio.run(handle_command(directory, "groups partner"))
    assert "Unknown command" in asyncio.run(handle_command(directory, "dance"))


def test_groups_command_filters_within_groups(directory):
    assert asyncio.run(handle_command(directory, "groups internal mentor")) == "Mentoring (1)"
    assert asyncio.run(handle_command(directory, "groups internal category=events")) == (
        "Events (1)"
    )
    assert asyncio.run(handle_command(directory, "groups external nothing-matches")) == (
        "No resources found matching your search criteria."
    )
