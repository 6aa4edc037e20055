from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.core.errors import SourceUnavailable  # noqa: E402
from src.pipeline.grouper import by_category, by_type  # noqa: E402
from src.services.directory import SourceId, create_directory  # noqa: E402


async def export_groups(*, source: SourceId, group_by: str) -> list:
    directory = create_directory()
    key_fn = by_type if group_by == "type" else by_category
    groups = await directory.grouped(source, key_fn)
    return [group.to_dict() for group in groups]


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Write the grouped resources of one source as JSON"
    )
    parser.add_argument(
        "source",
        choices=[source.value for source in SourceId],
        help="Source to export",
    )
    parser.add_argument(
        "--group-by",
        choices=["category", "type"],
        default="category",
        help="Grouping key",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="File to write (defaults to stdout)",
    )
    args = parser.parse_args()

    try:
        payload = asyncio.run(
            export_groups(source=SourceId(args.source), group_by=args.group_by)
        )
    except SourceUnavailable as exc:
        print(f"Failed to process resources: {exc}", file=sys.stderr)
        sys.exit(1)

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {len(payload)} groups to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:  # pragma: no cover - graceful exit
        sys.exit(1)
