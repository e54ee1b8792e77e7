"""
AMBER Checkpoint v1.0 — Main Entry Point
Builds a shift roster offline and prints the author's view: evidence
reports, intended verdicts and the tells behind them.

Usage:
    python main.py                    # Brief the default shift
    python main.py --shift SHIFT_4    # Brief a specific shift
    python main.py --seed 7           # Reseed the roster (seed 7, 8, 9, ...)
    python main.py --json             # Dump the built subjects as JSON
    python main.py --status           # List all shifts and their directives
"""

import sys
import json
from dataclasses import replace

from shift_roster import DIRECTIVES, SHIFT_SEEDS, DEFAULT_SHIFT, load_shift_roster
from director import build_shift_subjects
from directives import directive_display, format_required_checks
from models import subject_to_dict
from tells import greeting_bpm


def _flag_value(args, flag):
    if flag in args:
        idx = args.index(flag)
        if idx + 1 < len(args):
            return args[idx + 1]
    return None


def show_status():
    """Print every shift with its published directive."""
    print(f"\n{'═'*60}")
    print(f"  AMBER CHECKPOINT v1.0 — SHIFT ROSTER")
    print(f"{'═'*60}")
    for shift_id, directive in DIRECTIVES.items():
        default = " (default)" if shift_id == DEFAULT_SHIFT else ""
        print(f"\n  {shift_id}{default} — {len(SHIFT_SEEDS.get(shift_id, []))} subject(s)")
        for line in directive_display(directive):
            print(f"    {line}")
        print(f"    CHECKS: {format_required_checks(directive.required_checks)}")
    print(f"\n{'═'*60}")


def show_subject(subject):
    tells = subject.bpm_tells
    print(f"\n{'─'*60}")
    print(f"  {subject.id}  {subject.name}  [{subject.subject_type.value} / "
          f"{subject.hierarchy_tier.value} / {subject.origin.value}]")
    print(f"  VERDICT: {subject.intended_outcome.value}    "
          f"GREETING BPM: {greeting_bpm(tells)}    SEED: {subject.seed}")
    if tells and tells.type:
        print(f"  TELL: {tells.type.value} +{tells.base_elevation}  {tells.description}")
    print(f"  \"{subject.greeting_text}\"")
    for kind, report in subject.evidence_outputs.items():
        print(f"\n  [{kind.value}]")
        for line in report:
            print(f"    {line}")


def main():
    args = sys.argv[1:]

    if "--status" in args:
        show_status()
        return

    shift_id = _flag_value(args, "--shift") or DEFAULT_SHIFT
    try:
        directive, seeds = load_shift_roster(shift_id)
    except KeyError as e:
        print(e.args[0])
        sys.exit(1)

    reseed = _flag_value(args, "--seed")
    if reseed is not None:
        seeds = [replace(s, seed=int(reseed) + i) for i, s in enumerate(seeds)]

    subjects = build_shift_subjects(seeds, directive)

    if "--json" in args:
        print(json.dumps([subject_to_dict(s, include_truth=True) for s in subjects],
                         indent=2, ensure_ascii=False))
        return

    print(f"\n{'═'*60}")
    print(f"  AMBER CHECKPOINT v1.0 — {shift_id} BRIEFING")
    for line in directive_display(directive):
        print(f"  {line}")
    print(f"{'═'*60}")

    for subject in subjects:
        show_subject(subject)

    denied = sum(1 for s in subjects if s.intended_outcome.value == "DENY")
    print(f"\n{'═'*60}")
    print(f"  {len(subjects)} subject(s): {len(subjects) - denied} approve, {denied} deny")
    print(f"{'═'*60}")


if __name__ == "__main__":
    main()
