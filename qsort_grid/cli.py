from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .catalog import get_catalog_summary, get_config_by_id, get_raw_config
from .config import get_config
from .grid_builder import LABEL_THEMES, build_grid_configuration
from .recommendation import alternative_options, get_ai_recommendation, get_configuration_rationale
from .report import catalog_frame, grid_frame
from .validator import validate_distribution


def _print_json(obj) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def cmd_catalog(args: argparse.Namespace) -> None:
    if args.json:
        entries = json.loads(catalog_frame().to_json(orient="records"))
        _print_json({"summary": get_catalog_summary(), "entries": entries})
    else:
        print(catalog_frame().to_string(index=False))


def cmd_show(args: argparse.Namespace) -> int:
    cfg = get_raw_config(args.id) if args.raw else get_config_by_id(args.id)
    if cfg is None:
        print(f"No catalog entry with id {args.id!r}", file=sys.stderr)
        return 1
    out = cfg.to_dict()
    out["rationale"] = get_configuration_rationale(cfg)
    _print_json(out)
    return 0


def cmd_generate(args: argparse.Namespace) -> None:
    grid = build_grid_configuration(
        (args.min, args.max),
        args.total,
        kind="flat" if args.flat else "bell",
        theme=args.theme,
    )
    if args.table:
        print(grid_frame(grid).to_string(index=False))
    else:
        _print_json(grid.to_dict())


def cmd_validate(args: argparse.Namespace) -> int:
    result = validate_distribution(args.cells, args.total)
    _print_json(result.to_dict())
    return 0 if result.is_valid else 2


def cmd_recommend(args: argparse.Namespace) -> None:
    rec = get_ai_recommendation({
        "studyType": args.study_type,
        "participantCount": args.participants,
        "participantExpertise": args.expertise,
        "complexityLevel": args.complexity,
        "timeConstraint": args.time,
        "previousExperience": args.experience,
    })
    out = rec.to_dict()
    out["rationale"] = get_configuration_rationale(rec.config)
    out["alternativeOptions"] = [
        {"id": o["config"].id, "confidence": o["confidence"], "reasoning": o["reasoning"]}
        for o in alternative_options(rec)
    ]
    _print_json(out)


def cmd_version(args: argparse.Namespace) -> None:
    print(__version__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="qsort-grid", description="Q-sort grid configuration and distribution engine")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("catalog", help="List the standard grid catalog")
    c.add_argument("--json", action="store_true", help="Emit JSON instead of a table")
    c.set_defaults(func=cmd_catalog)

    s = sub.add_parser("show", help="Show one catalog entry with its rationale")
    s.add_argument("id")
    s.add_argument("--raw", action="store_true", help="Show the distribution as authored, uncorrected")
    s.set_defaults(func=cmd_show)

    g = sub.add_parser("generate", help="Generate a labelled grid for a range and item count")
    g.add_argument("--min", type=int, required=True)
    g.add_argument("--max", type=int, required=True)
    g.add_argument("--total", type=int, required=True)
    g.add_argument("--flat", action="store_true", help="Even spread instead of a bell curve")
    g.add_argument("--theme", default=None, choices=sorted(LABEL_THEMES))
    g.add_argument("--table", action="store_true", help="Print a per-column table")
    g.set_defaults(func=cmd_generate)

    v = sub.add_parser("validate", help="Score a distribution (cells per column, left to right)")
    v.add_argument("cells", type=int, nargs="+")
    v.add_argument("--total", type=int, required=True)
    v.set_defaults(func=cmd_validate)

    r = sub.add_parser("recommend", help="Recommend a catalog grid for a study")
    r.add_argument("--study-type", dest="study_type", default="exploratory", choices=["exploratory", "confirmatory", "mixed"])
    r.add_argument("--participants", type=int, default=30)
    r.add_argument("--expertise", default="general", choices=["expert", "general", "mixed"])
    r.add_argument("--complexity", default="moderate", choices=["simple", "moderate", "complex"])
    r.add_argument("--time", default="medium", choices=["short", "medium", "long"])
    r.add_argument("--experience", default="none", choices=["none", "some", "extensive"])
    r.set_defaults(func=cmd_recommend)

    ver = sub.add_parser("version", help="Print package version")
    ver.set_defaults(func=cmd_version)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=get_config().log_level, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    rc = args.func(args)
    return int(rc or 0)


if __name__ == "__main__":
    sys.exit(main())
