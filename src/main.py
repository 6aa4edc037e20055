import asyncio
import logging
import shlex

from src.core.config import settings
from src.core.errors import PersistenceFailure, SourceUnavailable
from src.pipeline.query import SearchParams
from src.services.directory import ResourceDirectory, SourceId, create_directory

HELP_TEXT = (
    "Commands:\n"
    "  search <text> [category=<name>] [type=internal|external]\n"
    "  groups internal|external|catalog [<text>] [category=<name>]\n"
    "  fav <resource name>      toggle a favorite\n"
    "  favorites                list favorites\n"
    "  quit"
)


def _parse_search(args: list[str]) -> SearchParams:
    options = {}
    words = []
    for arg in args:
        key, sep, value = arg.partition("=")
        if sep and key in {"category", "type"}:
            options[key] = value
        else:
            words.append(arg)
    options["query"] = " ".join(words)
    return SearchParams.from_mapping(options)


async def handle_command(directory: ResourceDirectory, line: str) -> str:
    parts = shlex.split(line)
    if not parts:
        return ""
    command, args = parts[0].lower(), parts[1:]

    if command == "help":
        return HELP_TEXT

    if command == "search":
        try:
            params = _parse_search(args)
        except ValueError as exc:
            return str(exc)
        result = await directory.search(params)
        if not result.results:
            return "No resources found matching your search criteria."
        return "\n".join(
            f"- {r.name} [{r.type.value}] ({r.category})" for r in result.results
        )

    if command == "groups":
        try:
            source_id = SourceId((args or ["internal"])[0].lower())
        except ValueError:
            return "Unknown source; use internal, external or catalog."
        try:
            params = _parse_search(args[1:])
        except ValueError as exc:
            return str(exc)
        groups = await directory.grouped(source_id, params=params)
        if not groups:
            return "No resources found matching your search criteria."
        return "\n".join(f"{group.key} ({len(group.items)})" for group in groups)

    if command == "fav":
        name = " ".join(args).strip()
        if not name:
            return "Usage: fav <resource name>"
        added = directory.toggle_favorite(name)
        return f"{'Added' if added else 'Removed'} '{name}' {'to' if added else 'from'} favorites."

    if command == "favorites":
        favorites = await directory.list_favorites()
        if not favorites:
            return "No favorites yet."
        return "\n".join(f"* {r.name} [{r.type.value}] ({r.category})" for r in favorites)

    return f"Unknown command '{command}'. Type 'help' for guidance."


async def main():
    logging.basicConfig(level=settings.log_level.upper())
    directory = create_directory()

    print("USC Entrepreneurship Resources (type 'help' for guidance, 'quit' to exit)")
    print("-------------------------------------------------------------------------")

    while True:
        user_input = input("> ").strip()
        if user_input.lower() in ["quit", "exit"]:
            break

        try:
            output = await handle_command(directory, user_input)
        except (SourceUnavailable, PersistenceFailure) as exc:
            print(f"Failed to load resources: {exc}")
            continue

        if output:
            print(output)


if __name__ == "__main__":
    asyncio.run(main())
