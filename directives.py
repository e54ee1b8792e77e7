"""
AMBER Checkpoint v1.0 — Directive Evaluator
Computes the ground-truth verdict for a subject under the shift directive.

DENY iff the base condition matches and no declared or hidden exception
matches. Everything else is APPROVE.

Hidden exceptions count toward the verdict but are never part of the
player-facing directive text. DirectiveEvaluation keeps them in their own
list; use directive_display() for anything the player sees.
"""

from models import (
    SubjectSeed, DirectiveRule, DirectiveEvaluation, DirectiveCondition,
    ExceptionType, ExceptionTag, SubjectType, SubjectRole, HierarchyTier,
    OriginWorld, Verdict, RequiredCheck, GatheredInformation,
)


CYBORG_TYPES = (SubjectType.HUMAN_CYBORG, SubjectType.ROBOT_CYBORG)
SYNTHETIC_TYPES = (SubjectType.REPLICANT, SubjectType.ROBOT_CYBORG)


def _tagged(seed: SubjectSeed, tag: ExceptionTag) -> bool:
    return tag in seed.exception_tags


# ─────────────────────────────────────────────────────
# CONDITION / EXCEPTION TABLES
# ─────────────────────────────────────────────────────

CONDITION_TESTS = {
    DirectiveCondition.WARRANTS: lambda s: s.truth_flags.has_warrant,
    DirectiveCondition.REPLICANTS: lambda s: s.subject_type == SubjectType.REPLICANT,
    DirectiveCondition.SYNTHETICS: lambda s: s.subject_type in SYNTHETIC_TYPES,
    DirectiveCondition.ENGINEERS: lambda s: s.role == SubjectRole.ENGINEER,
    DirectiveCondition.TITAN_ORIGIN: lambda s: s.origin == OriginWorld.TITAN,
    DirectiveCondition.IO_ORIGIN: lambda s: s.origin == OriginWorld.IO,
    DirectiveCondition.NON_HUMANS: lambda s: s.subject_type != SubjectType.HUMAN,
    DirectiveCondition.ALL: lambda s: True,
}

# Derived-from-type OR explicit tag, so authors can force an exception.
EXCEPTION_TESTS = {
    ExceptionType.HUMANS: lambda s: s.subject_type == SubjectType.HUMAN,
    ExceptionType.VIP: lambda s: (s.hierarchy_tier == HierarchyTier.VIP
                                  or _tagged(s, ExceptionTag.VIP_OVERRIDE)),
    ExceptionType.MEDICAL: lambda s: (s.role == SubjectRole.MEDICAL
                                      or s.truth_flags.has_medical_emergency),
    ExceptionType.EARTH_ORIGIN: lambda s: s.origin == OriginWorld.EARTH,
    ExceptionType.CYBORG: lambda s: (s.subject_type in CYBORG_TYPES
                                     or _tagged(s, ExceptionTag.CYBORG_OVERRIDE)),
    ExceptionType.DIPLOMAT: lambda s: (s.role == SubjectRole.DIPLOMAT
                                       or _tagged(s, ExceptionTag.DIPLOMAT)),
    ExceptionType.EMERGENCY: lambda s: (_tagged(s, ExceptionTag.EMERGENCY)
                                        or s.truth_flags.has_medical_emergency),
}



def matches_condition(seed: SubjectSeed, condition) -> bool:
    test = CONDITION_TESTS.get(condition)
    return bool(test(seed)) if test else False


def matches_exception(seed: SubjectSeed, exception) -> bool:
    test = EXCEPTION_TESTS.get(exception)
    return bool(test(seed)) if test else False


# ─────────────────────────────────────────────────────
# EVALUATION
# ─────────────────────────────────────────────────────

def evaluate_directive(seed: SubjectSeed, directive: DirectiveRule) -> DirectiveEvaluation:
    base_match = matches_condition(seed, directive.base)
    declared = [ex for ex in directive.exceptions if matches_exception(seed, ex)]
    hidden = [ex for ex in directive.hidden_exceptions if matches_exception(seed, ex)]

    if base_match and not (declared or hidden):
        return DirectiveEvaluation(intended_outcome=Verdict.DENY)

    return DirectiveEvaluation(
        intended_outcome=Verdict.APPROVE,
        declared_exceptions=tuple(declared),
        hidden_exceptions=tuple(hidden),
    )


evaluate = evaluate_directive


def directive_display(directive: DirectiveRule) -> list:
    """Player-facing directive lines. Hidden exceptions never appear here."""
    lines = [f"DENY: {directive.base.value}"]
    lines.extend(f"EXCEPT: {ex.value}" for ex in directive.exceptions)
    return lines


# ─────────────────────────────────────────────────────
# REQUIRED CHECKS
# ─────────────────────────────────────────────────────

RULE_CHECK_MAP = {
    "CHECK_WARRANTS": [RequiredCheck.WARRANT],
    "CHECK_CREDENTIALS": [RequiredCheck.INCIDENT],
    "CHECK_TRANSIT": [RequiredCheck.TRANSIT],
    "CHECK_INCIDENTS": [RequiredCheck.INCIDENT],
}


def _unique(checks) -> list:
    return list(dict.fromkeys(checks))


def get_required_checks(directive: DirectiveRule = None, active_rules=None,
                        unlocked_checks=None) -> list:
    """
    Directive checks win. Otherwise map legacy rule names, otherwise fall
    back to DATABASE if that check is unlocked.
    """
    if directive and directive.required_checks:
        return _unique(directive.required_checks)

    checks = []
    for rule in active_rules or []:
        checks.extend(RULE_CHECK_MAP.get(rule, []))
    if checks:
        return _unique(checks)

    if unlocked_checks and RequiredCheck.DATABASE in unlocked_checks:
        return [RequiredCheck.DATABASE]
    return []


def is_check_complete(info: GatheredInformation, check: RequiredCheck) -> bool:
    if check == RequiredCheck.WARRANT:
        return info.warrant_check
    if check == RequiredCheck.TRANSIT:
        return info.transit_log
    if check == RequiredCheck.INCIDENT:
        return info.incident_history
    if check == RequiredCheck.DATABASE:
        return info.warrant_check or info.transit_log or info.incident_history
    return False


def get_missing_required_checks(info: GatheredInformation, required_checks) -> list:
    return [c for c in required_checks if not is_check_complete(info, c)]


def format_required_checks(required_checks) -> str:
    if not required_checks:
        return "NONE"
    return ", ".join(c.value for c in required_checks)
