#!/usr/bin/env python3
"""
Comorbidity Risk Projection CLI.

Runs a projection for one set of lifestyle answers against the analysis
service, falling back to the local heuristic when it is unavailable.

Usage:
    python scripts/project_risk.py --exercise daily --diet good --sleep 7-8 \\
        --stress low --smoking never --alcohol none --water 2-3L --screen 2-4 \\
        --snapshot record.json
    python scripts/project_risk.py ... --diabetes-score 75 --offline
    python scripts/project_risk.py ... --offline --json
"""

import os
import sys
import json
import asyncio
import logging
import argparse
from dotenv import load_dotenv

from risk_projection import (
    LIFESTYLE_OPTIONS,
    AnalysisClient,
    LifestyleAnswers,
    RiskProjectionResolver,
    derive_risk_factors,
    derive_user_id,
    probability_band,
)

# Load environment variables
load_dotenv()

# CLI flag -> LifestyleAnswers attribute
LIFESTYLE_FLAGS = {
    "exercise": "exercise",
    "diet": "diet",
    "sleep": "sleep",
    "stress": "stress",
    "smoking": "smoking",
    "alcohol": "alcohol",
    "water": "water_intake",
    "screen": "screen_time",
}


def load_snapshot(path: str) -> dict:
    """Read a health snapshot JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        snapshot = json.load(f)
    if not isinstance(snapshot, dict):
        raise ValueError(f"Snapshot in {path} must be a JSON object")
    return snapshot


def build_snapshot(args: argparse.Namespace) -> dict:
    """Snapshot from --snapshot, with --diabetes-score overriding its seed score."""
    snapshot = load_snapshot(args.snapshot) if args.snapshot else {}
    if args.diabetes_score is not None:
        risk_factors = dict(snapshot.get("riskFactors") or {})
        diabetes = dict(risk_factors.get("diabetes") or {})
        diabetes["score"] = args.diabetes_score
        risk_factors["diabetes"] = diabetes
        snapshot["riskFactors"] = risk_factors
    return snapshot


def build_answers(args: argparse.Namespace) -> LifestyleAnswers:
    return LifestyleAnswers(
        **{attr: getattr(args, flag) for flag, attr in LIFESTYLE_FLAGS.items()}
    )


def format_table(outcome) -> str:
    """Render predictions and derived risk factors as plain text."""
    lines = [f"Source: {outcome.source}"]
    if outcome.warning:
        lines.append(f"Note: {outcome.warning}")
    lines.append("")
    lines.append(f"{'Years':>5}  {'Condition':<28} {'Prob':>5}  Band")
    lines.append("-" * 50)
    for p in outcome.predictions:
        lines.append(
            f"{p.years:>5}  {p.condition:<28} {p.probability:>4}%  {probability_band(p.probability)}"
        )
        if p.interventions:
            lines.append(f"{'':>7}Interventions: {', '.join(p.interventions)}")

    lines.append("")
    lines.append("Risk factors:")
    for slug, factor in derive_risk_factors(outcome.predictions).items():
        lines.append(f"  {slug}: {factor['risk']} ({factor['score']})")
    return "\n".join(lines)


async def run_projection(args: argparse.Namespace):
    """Resolve a projection for the parsed arguments."""
    snapshot = build_snapshot(args)
    answers = build_answers(args).validate()
    user_id = args.user_id or derive_user_id(snapshot)

    client = None
    if not args.offline:
        client = AnalysisClient(
            base_url=args.api_url,
            token=os.getenv("PROJECTION_ANALYSIS_API_TOKEN"),
            timeout=args.timeout,
        )

    resolver = RiskProjectionResolver(timeout=args.timeout + 5)
    return await resolver.resolve_detailed(answers, snapshot, client, user_id=user_id)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Comorbidity risk projection from lifestyle answers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Project against the analysis service with a stored health record
  python scripts/project_risk.py --exercise regular --diet average --sleep 6-7 \\
      --stress high --smoking never --alcohol occasional --water 1-2L \\
      --screen 4-8 --snapshot record.json

  # Local heuristic only, seeded from a diabetes score
  python scripts/project_risk.py ... --diabetes-score 75 --offline
        """,
    )

    answers = parser.add_argument_group("lifestyle answers")
    for flag, attr in LIFESTYLE_FLAGS.items():
        answers.add_argument(
            f"--{flag}",
            required=True,
            choices=[code for code, _ in LIFESTYLE_OPTIONS[attr]],
            help=f"{attr.replace('_', ' ').capitalize()} answer",
        )

    parser.add_argument(
        "--snapshot",
        help="Path to a health snapshot JSON file",
    )
    parser.add_argument(
        "--diabetes-score",
        type=float,
        help="Diabetes risk score (0-100) used to seed the projection",
    )
    parser.add_argument(
        "--user-id",
        help="User id sent to the analysis service (default: derived from snapshot)",
    )
    parser.add_argument(
        "--api-url",
        default=os.getenv("PROJECTION_ANALYSIS_API_URL", "http://localhost:4000"),
        help="Analysis service base URL (default: http://localhost:4000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for the analysis service (default: 30)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the analysis service and use the local heuristic",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        outcome = asyncio.run(run_projection(args))
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    else:
        print(format_table(outcome))


if __name__ == "__main__":
    main()
