from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from ..export.report import format_currency, write_report
from ..export.snapshot import ExportError, SnapshotError, build_snapshot, load_snapshot, write_json
from ..export.store import ProjectStore
from ..session import DimensioningSession
from .fields import field_specs
from .models import DEFAULT_ASSUMPTIONS, NetworkType, UnknownNetworkError, load_assumptions
from .sizer import format_number

DEFAULT_STORE_DIR = Path.home() / ".teldim" / "projects"


def _parse_assignment(text: str) -> tuple[str, str]:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{text}'")
    name, raw = text.split("=", 1)
    return name.strip(), raw.strip()


def build_session(args: argparse.Namespace) -> DimensioningSession:
    assumptions = load_assumptions(args.assumptions) if args.assumptions else DEFAULT_ASSUMPTIONS

    if args.input:
        snapshot = load_snapshot(args.input)
        session = DimensioningSession(snapshot["network"], assumptions)
        session.replace_parameters(snapshot["network"], snapshot["parameters"])
        if args.network:
            session.select(args.network)
    else:
        session = DimensioningSession(args.network or NetworkType.GSM, assumptions)

    # Values that fail to parse are stored as 0, like the interactive form
    for name, raw in args.set or []:
        session.update_parameter(name, raw)
    return session


def print_summary(session: DimensioningSession) -> None:
    r = session.results
    params = session.active_parameters
    print(f"Réseau: {session.network.display_name}")
    for spec in field_specs(session.network):
        print(f"  {spec.label}: {format_number(getattr(params, spec.name))} {spec.unit}")
    print(f"Sites nécessaires: {r.sites}")
    print(f"Capacité totale: {r.capacity_label}")
    print(f"Taux de couverture: {r.coverage}%")
    print(f"Coût estimé: {format_currency(r.cost, ' ')} {session.assumptions.costs.currency}")
    print(f"Indicateur {r.metric_name}: {format_number(r.metric_value)} {r.metric_unit}")
    if r.availability is not None:
        print(f"Disponibilité: {format_number(r.availability)}%")


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Telecom network dimensioning (GSM, UMTS, LTE, microwave and optical links)."
    )
    parser.add_argument(
        "--network",
        "-n",
        help="Network type: gsm, umts, lte, hertzien (microwave), optique (optical). Default: gsm.",
    )
    parser.add_argument(
        "--set",
        "-s",
        action="append",
        type=_parse_assignment,
        metavar="NAME=VALUE",
        help="Override one parameter (repeatable), e.g. --set area=120 --set busyHour=20.",
    )
    parser.add_argument(
        "--input",
        "-i",
        help="Start from a previously exported JSON snapshot.",
    )
    parser.add_argument(
        "--assumptions",
        help="Path to a planning assumptions JSON (unit costs, sensitivities, ...).",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Path to write the JSON snapshot.",
    )
    parser.add_argument(
        "--report",
        choices=["html", "pdf"],
        help="Also write a printable report in this format.",
    )
    parser.add_argument(
        "--report-dir",
        default=".",
        help="Directory for the report file (default: current directory).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the snapshot as the local project of this network.",
    )
    parser.add_argument(
        "--store-dir",
        default=str(DEFAULT_STORE_DIR),
        help="Project store directory.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        session = build_session(args)
    except (
        FileNotFoundError,
        json.JSONDecodeError,
        UnicodeDecodeError,
        SnapshotError,
        UnknownNetworkError,
        KeyError,
    ) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print("Input validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    print_summary(session)

    snapshot: Dict[str, Any] = build_snapshot(session.network, session.active_parameters, session.results)
    try:
        if args.output:
            write_json(snapshot, args.output)
            print(f"\nSnapshot written to: {args.output}")
        if args.report:
            path = write_report(snapshot, args.report_dir, args.report, session.assumptions.costs.currency)
            print(f"Report written to: {path}")
        if args.save:
            ProjectStore(args.store_dir).save(snapshot)
            print(f"Project saved in: {args.store_dir}")
    except ExportError as e:
        print(f"Export error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
