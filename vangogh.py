#!/usr/bin/env python3
"""
Van Gogh — Line Integral Convolution Filter
CLI entry point for browsing effects and presets. Also importable as a library.

Usage:
    python vangogh.py list-effects
    python vangogh.py info lic
    python vangogh.py search noise
    python vangogh.py presets --category Painterly
    python vangogh.py regions
"""

import argparse
import logging
import sys

from effects import EFFECTS, CATEGORIES, list_effects, search_effects
import presets as lic_presets

__version__ = "0.1.0"

logger = logging.getLogger("vangogh")


def cmd_list_effects(args):
    """List all available effects, grouped by category."""
    compact = getattr(args, "compact", False)
    total = 0
    for cat_key, cat_label in CATEGORIES.items():
        effects = list_effects(category=cat_key)
        if not effects:
            continue
        total += len(effects)
        print(f"\n  {cat_label} ({len(effects)})")
        print(f"  {'—' * 50}")
        for e in effects:
            print(f"    {e['name']:12s} — {e['description']}")
            if not compact:
                params_str = ", ".join(f"{k}={v}" for k, v in e["params"].items())
                print(f"    {'':12s}   Params: {params_str}")
    print(f"\n  Total: {total} effects. Use 'vangogh info <effect>' for details.\n")


def cmd_info(args):
    """Show detailed info about a single effect."""
    name = args.effect_name
    if name not in EFFECTS:
        matches = [n for n in EFFECTS if name in n]
        if matches:
            print(f"Unknown effect: {name}. Did you mean: {', '.join(matches)}?")
        else:
            print(f"Unknown effect: {name}. Use 'vangogh list-effects' to see all.")
        return 1

    entry = EFFECTS[name]
    cat = entry.get("category", "other")
    ranges = entry.get("param_ranges", {})
    choices = entry.get("param_choices", {})
    print(f"\n  {name}")
    print(f"  {'—' * 40}")
    print(f"  Category:    {CATEGORIES.get(cat, cat).upper()}")
    print(f"  Description: {entry['description']}")
    print(f"\n  Parameters:")
    for k, v in entry["params"].items():
        hint = ""
        if k in ranges:
            hint = f"[{ranges[k]['min']} .. {ranges[k]['max']}]"
        elif k in choices:
            hint = "{" + ", ".join(choices[k]) + "}"
        print(f"    {k:20s} = {str(v):12s} {hint}")
    print(f"\n  Supports 'mix' (0.0-1.0), 'blend_mode', 'region' and 'feather'.\n")
    return 0


def cmd_search(args):
    """Search effects by name or description."""
    results = search_effects(args.query)
    if not results:
        print(f"No effects matching '{args.query}'.")
        return 1
    print(f"\n  Results for '{args.query}' ({len(results)} found):")
    print(f"  {'—' * 50}")
    for e in results:
        cat = CATEGORIES.get(e["category"], e["category"]).upper()
        print(f"    {e['name']:12s} [{cat:8s}] — {e['description']}")
    print()
    return 0


def cmd_presets(args):
    """List built-in parameter presets."""
    if args.category:
        items = lic_presets.get_presets_by_category(args.category)
        if not items:
            valid = ", ".join(lic_presets.list_categories())
            print(f"Unknown preset category: {args.category}. Available: {valid}")
            return 1
    else:
        items = lic_presets.BUILT_IN_PRESETS
    print(f"\n  Presets ({len(items)})")
    print(f"  {'—' * 50}")
    for p in items:
        print(f"    {p['name']:16s} [{p['effect']:8s}] {p['description']}")
    print()
    return 0


def cmd_regions(args):
    """List region-of-interest presets."""
    from core.region import list_presets, REGION_PRESETS
    regions = list_presets()
    print(f"\n  Region Presets ({len(regions)} available)")
    print(f"  {'—' * 50}")
    for name in sorted(regions):
        x, y, w, h = REGION_PRESETS[name]
        print(f"    {name:14s}  x={x}, y={y}, w={w}, h={h}")
    print(f"\n  Custom: region='x,y,w,h' (pixels or 0-1 fractions)\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vangogh",
        description="Van Gogh — Line Integral Convolution image filter",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("list-effects", help="List all available effects")
    p.add_argument("--compact", action="store_true", help="Compact view (names only)")

    p = sub.add_parser("info", help="Show detailed info about an effect")
    p.add_argument("effect_name", help="Effect name")

    p = sub.add_parser("search", help="Search effects by name or description")
    p.add_argument("query", help="Search term")

    p = sub.add_parser("presets", help="List built-in parameter presets")
    p.add_argument("--category", help="Filter by preset category")

    sub.add_parser("regions", help="List region presets")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "list-effects": cmd_list_effects,
        "info": cmd_info,
        "search": cmd_search,
        "presets": cmd_presets,
        "regions": cmd_regions,
    }

    if args.command not in commands:
        parser.print_help()
        return 0
    try:
        return commands[args.command](args) or 0
    except Exception as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
