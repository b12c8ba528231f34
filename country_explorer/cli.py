from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ExplorerConfig, build_active_source, load_config, setup_logging
from .errors import ConfigError
from .pipeline import available_regions
from .records import FilterCriteria, PopulationBucket
from .render import EMPTY_MESSAGE, records_to_frame
from .state import ExplorerState, FetchStatus, build_view, ensure_loaded, with_criteria
from .utils import exception_payload, utc_now_iso, write_json


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="country-explorer", add_help=True)
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Path to the JSON configuration file.")
    common.add_argument("--source", help="Source id from the configuration (overrides active_source).")
    common.add_argument(
        "--debug",
        action="store_true",
        help="Include tracebacks in JSON error output.",
    )

    search = sub.add_parser("search", parents=[common], help="Filter countries and print the results.")
    search.add_argument("--search", default="", help="Text matched against name, region and subregion.")
    search.add_argument("--region", default="", help="Exact region label, e.g. Europe.")
    search.add_argument(
        "--population",
        default="",
        choices=["", *[b.value for b in PopulationBucket if b is not PopulationBucket.NONE]],
        help="Population bucket: small (<1M), medium (1M-50M), large (>50M).",
    )
    search.add_argument("--policy", choices=["show_all", "require_filter"], help="Display policy override.")
    search.add_argument("--format", choices=["table", "json"], default="table")
    search.add_argument("--out", help="Also write the visible records to this JSON file.")

    sub.add_parser("regions", parents=[common], help="List regions present in the source.")
    return p.parse_args(argv)


def _load_state(config: ExplorerConfig) -> ExplorerState | None:
    source = build_active_source(config)
    state = ensure_loaded(ExplorerState(), source)
    if state.status is FetchStatus.FAILED:
        print(f"ERROR: {state.error}", file=sys.stderr)
        return None
    return state


def _run_search(args: argparse.Namespace, config: ExplorerConfig) -> int:
    state = _load_state(config)
    if state is None:
        return 1

    criteria = FilterCriteria.from_inputs(args.search, args.region, args.population)
    view = build_view(with_criteria(state, criteria), config.display_policy)

    if not view.show_results:
        print("Enter a search term or pick a region/population filter to see countries.")
        return 0

    if args.out:
        write_json(
            Path(args.out).expanduser(),
            {
                "generated_at": utc_now_iso(),
                "source": config.active_source,
                "criteria": {
                    "search": criteria.search_text,
                    "region": criteria.region,
                    "population": criteria.population_bucket.value,
                },
                "countries": [r.to_dict() for r in view.visible],
            },
        )

    if args.format == "json":
        print(json.dumps([r.to_dict() for r in view.visible], ensure_ascii=False, indent=2))
        return 0

    if not view.visible:
        print(EMPTY_MESSAGE)
        return 0

    print(records_to_frame(view.visible).to_string(index=False))
    print(f"\n{len(view.visible)} of {view.total} countries")
    return 0


def _run_regions(args: argparse.Namespace, config: ExplorerConfig) -> int:
    state = _load_state(config)
    if state is None:
        return 1
    for region in available_regions(state.base):
        print(region)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            active_source=args.source,
            display_policy=getattr(args, "policy", None),
        )
        config.active_source_cfg()
    except ConfigError as exc:
        if args.debug:
            print(json.dumps(exception_payload(exc, debug=True)), file=sys.stderr)
        else:
            print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    setup_logging(config.log_level)

    try:
        if args.cmd == "search":
            return _run_search(args, config)
        if args.cmd == "regions":
            return _run_regions(args, config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    raise RuntimeError(f"Unsupported command: {args.cmd}")


if __name__ == "__main__":
    raise SystemExit(main())
