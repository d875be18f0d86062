"""
Command-line harness around the catalog checks.

    python -m ingredient_audit.cli analyze [SEED_FILE] [--output REPORT] [--threshold 0.85]
    python -m ingredient_audit.cli validate ASSIGNMENTS_JSON [--output REPORT]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import List, Optional

from ingredient_audit.config import Settings
from ingredient_audit.core.analysis import analyze
from ingredient_audit.core.models import AnalysisReport, ValidationResult
from ingredient_audit.core.validation import validate_assignments
from ingredient_audit.logger import setup_logging
from ingredient_audit.services.exceptions import ServiceError
from ingredient_audit.services.json_repo import JSONReportRepo, _atomic_write, load_assignments
from ingredient_audit.services.metrics import MetricsLogger
from ingredient_audit.services.seed_loader import load_seed_file

logger = logging.getLogger("ingredient_audit.cli")

RULE = "-" * 50


def threshold_arg(value: str) -> float:
    try:
        threshold = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not 0.0 <= threshold <= 1.0:
        raise argparse.ArgumentTypeError(f"must be between 0 and 1, got {value}")
    return threshold


def format_report(report: AnalysisReport) -> str:
    out: List[str] = [
        "",
        "=" * 40,
        "GLOBAL INGREDIENTS ANALYSIS REPORT",
        "=" * 40,
        "",
        "SUMMARY",
        f"  * Duplicates found: {len(report.duplicates)}",
        f"  * Generic items: {len(report.generics)}",
        f"  * Miscategorized items: {len(report.miscategorized)}",
        f"  * Total issues: {report.total_issues()}",
        "",
    ]
    if report.duplicates:
        out += ["DUPLICATES TO CONSOLIDATE", RULE]
        for idx, dup in enumerate(report.duplicates, start=1):
            out += [
                f'{idx}. "{dup.name1}" <-> "{dup.name2}"',
                f"   Category: {dup.category}",
                f"   Reason: {dup.reason.description}",
                "",
            ]
    if report.generics:
        out += ["GENERIC ITEMS TO REMOVE", RULE]
        for idx, gen in enumerate(report.generics, start=1):
            out += [f'{idx}. "{gen.name}" ({gen.category})', f"   Reason: {gen.reason}", ""]
    if report.miscategorized:
        out += ["MISCATEGORIZED ITEMS TO MOVE", RULE]
        for idx, misc in enumerate(report.miscategorized, start=1):
            out += [
                f'{idx}. "{misc.name}"',
                f"   Current: {misc.current_category}",
                f"   Suggested: {misc.suggested_category} -> {misc.suggested_subcategory}",
                f"   Reason: {misc.reason}",
                "",
            ]
    out += ["=" * 40, "END OF REPORT", "=" * 40]
    return "\n".join(out)


def format_validation(result: ValidationResult, max_warnings: int = 10) -> str:
    out: List[str] = [
        "",
        "=" * 40,
        "INGREDIENT DATA VALIDATION REPORT",
        "=" * 40,
        "",
        "SUMMARY",
        f"  * Total ingredients: {result.stats.total_ingredients}",
        f"  * Validation status: {'PASSED' if result.is_valid else 'FAILED'}",
        f"  * Errors: {len(result.errors)}",
        f"  * Warnings: {len(result.warnings)}",
        "",
        "BY CATEGORY",
        RULE,
    ]
    for category, count in sorted(result.stats.by_category.items(), key=lambda kv: -kv[1]):
        out.append(f"  {category:<25} {count:>4} items")
    out += ["", "BY SUBCATEGORY", RULE]
    for key, count in sorted(result.stats.by_subcategory.items(), key=lambda kv: -kv[1]):
        out.append(f"  {key:<48}{count:>4}")
    if result.errors:
        out += ["", "ERRORS", RULE]
        out += [f"{idx}. {err}" for idx, err in enumerate(result.errors, start=1)]
    if result.warnings:
        out += ["", "WARNINGS", RULE]
        out += [f"{idx}. {w}" for idx, w in enumerate(result.warnings[:max_warnings], start=1)]
        if len(result.warnings) > max_warnings:
            out.append(f"... and {len(result.warnings) - max_warnings} more warnings")
    out += ["", "=" * 40, "END OF VALIDATION REPORT", "=" * 40]
    return "\n".join(out)


def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    seed_file = args.seed_file or settings.seed_file
    threshold = args.threshold if args.threshold is not None else settings.similarity_threshold

    records = load_seed_file(seed_file)
    t0 = time.perf_counter()
    report = analyze(records, threshold=threshold)
    MetricsLogger(settings).log_latency(
        "analyze", (time.perf_counter() - t0) * 1000.0, origin="cli",
        extra={"records": len(records), "issues": report.total_issues()},
    )
    print(format_report(report))

    repo = JSONReportRepo(settings, path=args.output)
    repo.save(report)
    logger.info("Detailed report saved to: %s", repo.path)
    return 0


def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    assignments = load_assignments(args.assignments)
    logger.info("Loaded %d ingredient assignments", len(assignments))
    result = validate_assignments(assignments)
    print(format_validation(result))

    if args.output:
        payload = json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2)
        _atomic_write(args.output, payload.encode("utf-8"))
        logger.info("Validation report saved to: %s", args.output)
    return 0 if result.is_valid else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ingredient-audit",
        description="Find duplicate, generic and miscategorized catalog ingredients.",
    )
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p_analyze = sub.add_parser("analyze", help="Analyze a SQL seed file")
    p_analyze.add_argument("seed_file", nargs="?", help="Defaults to SEED_FILE")
    p_analyze.add_argument("--output", "-o", default=None, help="Defaults to REPORT_FILE")
    p_analyze.add_argument("--threshold", type=threshold_arg, default=None, help="Near-duplicate similarity cutoff")
    p_analyze.set_defaults(func=_cmd_analyze)

    p_validate = sub.add_parser("validate", help="Validate subcategory assignments (JSON array)")
    p_validate.add_argument("assignments")
    p_validate.add_argument("--output", "-o", default=None)
    p_validate.set_defaults(func=_cmd_validate)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(args.log_level or settings.log_level)
    try:
        return args.func(args, settings)
    except ServiceError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
