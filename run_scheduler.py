#!/usr/bin/env python3
"""
Room supervision scheduler CLI: single-workbook workflow.

The input workbook holds everything:
  CANDIDATES       (one name per row; or any first sheet listing names)
  FACILITY_CONFIG  (two_person_rooms, one_person_rooms, days, max_attempts, room_prefix)

Usage:
  # Step 1: Create/refresh the input sheets (optionally seeding names from a file)
  python run_scheduler.py setup --workbook "supervisors.xlsx" --names "names.csv"

  # Step 2 (optional): Review the list and check the pool size
  python run_scheduler.py review --workbook "supervisors.xlsx"

  # Step 3: Distribute and write the result workbook
  python run_scheduler.py distribute --workbook "supervisors.xlsx" \
      --out "distribution.xlsx" --seed 7
"""

import argparse
import sys
from pathlib import Path

from supervision.parse_inputs import (
    CandidateFileError, EmptyCandidateList, parse_workbook, read_candidates,
)
from supervision.solver import solve
from supervision.validate import dry_run_pool_check, validate_distribution
from supervision.workbook_sheets import setup_workbook
from supervision.write_schedule import add_conflicts_sheet, write_distribution


def _resolve(p: str) -> Path:
    pp = Path(p)
    if pp.is_absolute():
        return pp
    return Path.cwd() / pp


def _load(args):
    wb_path = str(_resolve(args.workbook))
    print(f"Parsing: {wb_path}")
    try:
        ctx = parse_workbook(wb_path, random_seed=getattr(args, "seed", None))
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"  Candidates: {len(ctx.candidates)}")
    return ctx


def cmd_setup(args):
    """Create/refresh the CANDIDATES and FACILITY_CONFIG sheets."""
    wb_path = str(_resolve(args.workbook))
    names = None
    if args.names:
        try:
            names = read_candidates(str(_resolve(args.names)))
        except (CandidateFileError, EmptyCandidateList, FileNotFoundError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        print(f"Read {len(names)} name(s) from: {args.names}")
    print(f"Setting up sheets in: {wb_path}")
    setup_workbook(wb_path, names=names)
    print("Done. Sheets added/refreshed: CANDIDATES, FACILITY_CONFIG")


def cmd_review(args):
    """List the parsed candidates and warn about an undersized pool."""
    ctx = _load(args)
    cfg = ctx.config
    print(f"  Rooms: {cfg.two_person_rooms} two-person + {cfg.one_person_rooms} one-person"
          f" ({cfg.slots_per_day} slots per day), {cfg.days} day(s)")
    print()
    for i, name in enumerate(ctx.candidates, 1):
        print(f"  {i:3d}. {name}")

    ok, msgs = dry_run_pool_check(ctx.candidates, cfg)
    if ok:
        print("\nPool size: OK")
    else:
        print("\nWarning:")
        for m in msgs:
            print(f"  {m}")


def _apply_overrides(cfg, args):
    for attr in ("two_person_rooms", "one_person_rooms", "days"):
        value = getattr(args, attr)
        if value is not None:
            setattr(cfg, attr, value)
    if args.attempts is not None:
        cfg.max_attempts = args.attempts


def cmd_distribute(args):
    """Run the engine and produce the distribution workbook."""
    ctx = _load(args)
    cfg = ctx.config
    _apply_overrides(cfg, args)
    out_path = str(_resolve(args.out))

    # Step 1: dry-run check
    ok, msgs = dry_run_pool_check(ctx.candidates, cfg)
    if not ok:
        print("\nWarning: pool size issues (will attempt anyway):")
        for m in msgs:
            print(f"  {m}")

    # Step 2: solve
    print(f"\nDistributing ({cfg.max_attempts} attempts max)...")
    try:
        distribution, status, messages = solve(ctx.candidates, cfg, random_seed=ctx.random_seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if distribution is None:
        print(f"\nDistribution FAILED: {status}")
        for m in messages:
            print(f"  {m}")
        # Output holds only the CONFLICTS sheet
        Path(out_path).unlink(missing_ok=True)
        add_conflicts_sheet(out_path, messages)
        print(f"\nConflicts written to: {out_path}")
        sys.exit(1)

    print(f"  Status: {status}")
    for m in messages:
        print(f"  {m}")

    # Step 3: validate
    valid, violations = validate_distribution(distribution, cfg, ctx.candidates)
    if valid:
        print("  Validation: OK")
    else:
        print(f"  Validation: {len(violations)} issue(s)")
        for v in violations[:15]:
            print(f"    {v}")
        if len(violations) > 15:
            print(f"    ... and {len(violations) - 15} more")

    # Step 4: write
    print(f"\nWriting distribution to: {out_path}")
    write_distribution(out_path, distribution, ctx.candidates, cfg)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Room supervision scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", help="Command")

    # setup
    p_setup = sub.add_parser("setup", help="Create/refresh input sheets")
    p_setup.add_argument("--workbook", required=True, help="Workbook path")
    p_setup.add_argument("--names", default=None, help="Optional .xlsx/.csv name list to copy in")

    # review
    p_review = sub.add_parser("review", help="List candidates and check pool size")
    p_review.add_argument("--workbook", required=True, help="Workbook (or .csv) path")

    # distribute
    p_dist = sub.add_parser("distribute", help="Distribute candidates over rooms and days")
    p_dist.add_argument("--workbook", required=True, help="Workbook (or .csv) path")
    p_dist.add_argument("--out", default="distribution.xlsx")
    p_dist.add_argument("--seed", type=int, default=None)
    p_dist.add_argument("--attempts", type=int, default=None)
    p_dist.add_argument("--two-person-rooms", dest="two_person_rooms", type=int, default=None)
    p_dist.add_argument("--one-person-rooms", dest="one_person_rooms", type=int, default=None)
    p_dist.add_argument("--days", type=int, default=None)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    dispatch = {
        "setup": cmd_setup,
        "review": cmd_review,
        "distribute": cmd_distribute,
    }
    dispatch[args.command](args)


if __name__ == "__main__":
    main()
