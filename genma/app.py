import argparse
import json
import logging
import sys
import yaml
from .core.store import ElementStore
from .pipeline.layout import LayoutError, place_design


logger = logging.getLogger(__name__)


def place(args: argparse.Namespace) -> int:
    with open(args.design, "r", encoding="utf-8") as f:
        design = json.load(f)

    store = ElementStore()
    try:
        placed = place_design(store, design)
    except LayoutError as e:
        logger.error(f"Cannot place {args.design}: {e}")
        return 1

    data = {
        "frames": placed.frame_ids,
        "pending_assets": [
            {"element": r.element_id, "prompt": r.prompt}
            for r in placed.asset_requests
        ],
        "elements": [e.to_dict() for e in store],
    }
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        logger.info(f"Wrote {len(store)} elements to {args.output}")
    else:
        yaml.safe_dump(data, sys.stdout, sort_keys=False)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="genma", description="Genma design canvas tools."
    )
    parser.add_argument(
        "--loglevel",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    place_parser = subparsers.add_parser(
        "place", help="Place a generated design and dump its elements"
    )
    place_parser.add_argument("design", help="Design JSON file")
    place_parser.add_argument(
        "-o", "--output", help="Write YAML here instead of stdout"
    )
    place_parser.set_defaults(func=place)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.loglevel),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
