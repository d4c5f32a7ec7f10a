# src/pbcgeom/cli/commands/measure.py

"""Measure command."""

import argparse
import json

import numpy as np

from pbcgeom.geometry.dihedral import dihedral_and_derivatives
from pbcgeom.geometry.internal import (
    angle_and_derivatives,
    distance_and_derivatives,
    implicit_derivative,
)
from pbcgeom.io import load_positions, parse_box
from pbcgeom.utils.constants import MAXFLOAT
from pbcgeom.utils.logging import get_logger

logger = get_logger()

_KINDS = {
    "pair": (distance_and_derivatives, "distance"),
    "angle": (angle_and_derivatives, "angle (deg)"),
    "dihedral": (dihedral_and_derivatives, "dihedral (deg)"),
}


def add_parser(subparsers):
    """Add measure command parser."""
    parser = subparsers.add_parser(
        "measure",
        description="Measure one distance, angle or dihedral in a periodic box",
        help="Measure an internal coordinate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--positions",
        required=True,
        help="Positions file (.npy, .pt, .xyz or whitespace text, one particle per row)",
    )

    parser.add_argument(
        "--box",
        type=float,
        nargs="+",
        required=True,
        help="Box length (cubic) or three box lengths",
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--pair", type=int, nargs=2, metavar="ID", help="Distance between two particles")
    group.add_argument("--angle", type=int, nargs=3, metavar="ID", help="Angle, vertex id last")
    group.add_argument("--dihedral", type=int, nargs=4, metavar="ID", help="Dihedral of four particles")

    parser.add_argument(
        "--cutoff",
        type=float,
        default=None,
        help="Distance cutoff for pairs and angle arms (default: none)",
    )

    parser.add_argument(
        "--derivatives",
        action="store_true",
        help="Also print the gradient with respect to each particle",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    parser.set_defaults(func=run)


def _selected(args):
    for kind in ("pair", "angle", "dihedral"):
        ids = getattr(args, kind)
        if ids is not None:
            return kind, ids
    raise ValueError("No interaction selected")


def _gradient_rows(kind: str, ids, derivatives: np.ndarray) -> dict:
    """Map every particle id to its gradient, including the implicit one."""
    implicit = implicit_derivative(derivatives)
    if kind == "pair":
        explicit_ids = [ids[1]]
        implicit_id = ids[0]
    else:
        explicit_ids = list(ids[:-1])
        implicit_id = ids[-1]

    rows = {pid: derivatives[k].tolist() for k, pid in enumerate(explicit_ids)}
    rows[implicit_id] = implicit.tolist()
    return rows


def run(args):
    """Run measure command."""
    try:
        positions = load_positions(args.positions)
        box_half_lengths = parse_box(args.box)
        kind, ids = _selected(args)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(str(e))
        return 1

    n = positions.shape[0]
    if any(i < 0 or i >= n for i in ids):
        logger.error(f"Particle ids {ids} out of range for {n} particles")
        return 1

    cutoff2 = MAXFLOAT if args.cutoff is None else args.cutoff ** 2
    logger.info(f"Measuring {kind} {ids} in box {(2.0 * box_half_lengths).tolist()}")

    func, label = _KINDS[kind]
    result = func(ids, positions, box_half_lengths, cutoff2)

    payload = {
        "kind": kind,
        "ids": list(ids),
        "within_cutoff": result.within_cutoff,
        "value": float(result.value) if result.within_cutoff else None,
    }
    if args.derivatives and result.within_cutoff:
        payload["derivatives"] = {
            str(pid): row for pid, row in _gradient_rows(kind, ids, result.derivatives).items()
        }

    if args.json:
        print(json.dumps(payload, indent=2))
        return 0

    if not result.within_cutoff:
        print(f"{label}: excluded (beyond cutoff {args.cutoff})")
        return 0

    print(f"{label}: {result.value:.6f}")
    if "derivatives" in payload:
        print("gradients:")
        for pid, row in payload["derivatives"].items():
            print(f"  {pid:>6s}: {row[0]: .6f} {row[1]: .6f} {row[2]: .6f}")
    return 0
