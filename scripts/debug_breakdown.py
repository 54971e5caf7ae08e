"""
Debug an evaluation: print the per-section breakdown for an answer set and,
optionally, the accountability fields it would produce for one or more leaders.

Answers file: JSON object keyed by "category.section.question" with option values.
Leader file: JSON leader record (camelCase, as persisted).

Usage:
    python scripts/debug_breakdown.py --answers answers.json
    python scripts/debug_breakdown.py --answers answers.json --leader jane-doe.json
    python scripts/debug_breakdown.py --answers answers.json --leader a.json --leader b.json --audit-json audit.json
    python scripts/debug_breakdown.py --catalog custom_questions.yaml --answers answers.json --verbose
"""

import argparse
import json
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

load_dotenv()

from accountability.config import get_log_level
from accountability.engine import AccountabilityEngine
from accountability.models.leader import read_leader
from accountability.scorers.question_bank_registry import load_evaluation_data
from accountability.scorers.weighted_aggregator import ScoreBreakdown
from accountability.utils.logger import RecomputeRunContext, configure_global_logging, get_logger
from accountability.utils.scoring_audit import ScoringAuditLog
from accountability.validators.answer_normalizer import InvalidAnswerError

console = Console()

STATUS_STYLE = {"full": "[green]full[/green]", "partial": "[yellow]partial[/yellow]", "missing": "[red]missing[/red]"}


def _load_json(path: str) -> dict:
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return data


def print_breakdown(breakdown: ScoreBreakdown, verbose: bool = False) -> None:
    summary = (
        f"[bold]{breakdown.final_score:.1f}/100[/bold] | {breakdown.rating}\n"
        f"{breakdown.recommendation}\n"
        f"Answered: {breakdown.answered}/{breakdown.total}"
    )
    console.print(Panel(summary, title="Final Score", border_style="blue"))

    for category in breakdown.categories:
        title = f"{category.title}: {category.score:.2f}/{category.max_score:g} ({category.pct:.0f}%)"
        if category.renormalized:
            title += f" (weights renormalized, sum={category.weight_sum:g})"
        table = Table(title=title)
        table.add_column("Section", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Answered", justify="right")
        table.add_column("Ratio", justify="right")
        table.add_column("Points", justify="right")
        if verbose:
            table.add_column("Weight", justify="right")
            table.add_column("Earned", justify="right")

        for section in category.sections:
            row = [
                section.subgroup,
                STATUS_STYLE[section.status.value],
                f"{section.answered}/{section.total}",
                f"{section.ratio:.2f}",
                f"{section.points:.2f}",
            ]
            if verbose:
                row += [
                    f"{section.weight:g} -> {section.effective_weight:.3f}",
                    f"{section.earned:g}/{section.possible:g}",
                ]
            table.add_row(*row)
        console.print(table)

    console.print(breakdown.score_summary)


def main():
    parser = argparse.ArgumentParser(description="Print the score breakdown for an evaluation")
    parser.add_argument("--catalog", type=str, help="Question bank YAML (default: configured catalog)")
    parser.add_argument("--answers", type=str, required=True, help="Path to answers JSON")
    parser.add_argument(
        "--leader", type=str, action="append", default=[], help="Leader record JSON (repeatable)"
    )
    parser.add_argument("--audit-json", type=str, help="Write the scoring audit trail to this file")
    parser.add_argument("--verbose", action="store_true", help="Show section weights and raw points")
    args = parser.parse_args()

    configure_global_logging(get_log_level(), stage="debug")
    log = get_logger(log_level=get_log_level(), stage="debug")

    evaluation_data = load_evaluation_data(args.catalog)
    engine = AccountabilityEngine(evaluation_data)
    answers = _load_json(args.answers)
    audit_log = ScoringAuditLog(subject=Path(args.answers).stem)

    try:
        breakdown = engine.score(answers, audit_log=audit_log)
    except InvalidAnswerError as e:
        log.log_rejected_submission(Path(args.answers).stem, e.reason, e.location)
        console.print(f"[red]Invalid answer set at {e.location}: {e.reason}[/red]")
        sys.exit(1)

    print_breakdown(breakdown, verbose=args.verbose)

    if args.audit_json:
        audit_log.export_to_json(args.audit_json)

    if not args.leader:
        return

    failed = []
    with RecomputeRunContext(log, num_leaders=len(args.leader)) as ctx:
        for path in args.leader:
            try:
                started = time.perf_counter()
                leader = read_leader(_load_json(path))
                with log.time_leader(leader.slug or path, "recompute"):
                    fields = engine.recompute(leader, answers)
                log.log_recompute_complete(
                    leader.slug,
                    fields.accountability_score,
                    fields.completion_percentage,
                    len(fields.disputed_fields),
                    time.perf_counter() - started,
                )
                ctx.increment_success()
                console.print(f"\n[bold]{leader.slug or path}[/bold]")
                print(json.dumps(fields.to_record(), indent=2))
            except (OSError, ValueError) as e:
                ctx.increment_failure()
                failed.append((path, str(e)))
                console.print(f"[red]{path}: {e}[/red]")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
