import itertools

from models import (
    DirectiveRule, DirectiveCondition, ExceptionType, ExceptionTag, RequiredCheck,
    SubjectType, HierarchyTier, OriginWorld, SubjectRole, TruthFlags, Verdict,
    GatheredInformation,
)
from directives import (
    evaluate_directive, evaluate, matches_condition, matches_exception, directive_display,
    get_required_checks, get_missing_required_checks, is_check_complete,
    format_required_checks, CONDITION_TESTS, EXCEPTION_TESTS,
)


def test_every_condition_and_exception_has_a_test():
    assert set(CONDITION_TESTS) == set(DirectiveCondition)
    assert set(EXCEPTION_TESTS) == set(ExceptionType)


def test_vip_exception_approves_warrant(make_seed, warrants_except_vip):
    seed = make_seed(hierarchy_tier=HierarchyTier.VIP, truth_flags=TruthFlags(has_warrant=True))
    result = evaluate_directive(seed, warrants_except_vip)
    assert result.intended_outcome == Verdict.APPROVE
    assert result.matched_exceptions == [ExceptionType.VIP]


def test_standard_tier_with_warrant_denied(make_seed, warrants_except_vip):
    seed = make_seed(hierarchy_tier=HierarchyTier.STANDARD, truth_flags=TruthFlags(has_warrant=True))
    result = evaluate(seed, warrants_except_vip)
    assert result.intended_outcome == Verdict.DENY
    assert result.matched_exceptions == []


def test_base_not_matched_approves(make_seed, warrants_except_vip):
    result = evaluate_directive(make_seed(), warrants_except_vip)
    assert result.intended_outcome == Verdict.APPROVE
    assert result.matched_exceptions == []


def test_hidden_exception_kept_apart(make_seed):
    directive = DirectiveRule(
        id="T", base=DirectiveCondition.SYNTHETICS,
        exceptions=[ExceptionType.CYBORG], hidden_exceptions=[ExceptionType.EMERGENCY],
    )
    seed = make_seed(subject_type=SubjectType.REPLICANT,
                     truth_flags=TruthFlags(has_medical_emergency=True))
    result = evaluate_directive(seed, directive)
    assert result.intended_outcome == Verdict.APPROVE
    assert result.declared_exceptions == ()
    assert result.hidden_exceptions == (ExceptionType.EMERGENCY,)
    assert directive_display(directive) == ["DENY: SYNTHETICS", "EXCEPT: CYBORG"]


def test_exception_tags_force_exceptions(make_seed):
    seed = make_seed(exception_tags=(ExceptionTag.VIP_OVERRIDE, ExceptionTag.CYBORG_OVERRIDE,
                                     ExceptionTag.DIPLOMAT, ExceptionTag.EMERGENCY))
    for ex in (ExceptionType.VIP, ExceptionType.CYBORG, ExceptionType.DIPLOMAT,
               ExceptionType.EMERGENCY):
        assert matches_exception(seed, ex)
    assert not matches_exception(seed, ExceptionType.MEDICAL)


def test_condition_table(make_seed):
    replicant = make_seed(subject_type=SubjectType.REPLICANT)
    robot = make_seed(subject_type=SubjectType.ROBOT_CYBORG)
    engineer = make_seed(role=SubjectRole.ENGINEER, origin=OriginWorld.TITAN)
    human = make_seed()

    assert matches_condition(replicant, DirectiveCondition.REPLICANTS)
    assert matches_condition(robot, DirectiveCondition.SYNTHETICS)
    assert not matches_condition(robot, DirectiveCondition.REPLICANTS)
    assert matches_condition(engineer, DirectiveCondition.ENGINEERS)
    assert matches_condition(engineer, DirectiveCondition.TITAN_ORIGIN)
    assert not matches_condition(human, DirectiveCondition.NON_HUMANS)
    assert matches_condition(human, DirectiveCondition.ALL)
    assert not matches_condition(human, "NOT_A_CONDITION")


def test_deny_iff_base_and_no_exception(make_seed):
    seeds = [
        make_seed(subject_type=t, hierarchy_tier=tier, origin=o, role=r,
                  truth_flags=TruthFlags(has_warrant=w, has_medical_emergency=m))
        for t, tier, o, r, w, m in itertools.product(
            SubjectType, (HierarchyTier.LOWER, HierarchyTier.VIP),
            (OriginWorld.EARTH, OriginWorld.TITAN), (None, SubjectRole.ENGINEER, SubjectRole.MEDICAL),
            (False, True), (False, True))
    ]
    exception_sets = [[], [ExceptionType.VIP], [ExceptionType.HUMANS, ExceptionType.MEDICAL]]
    for condition in DirectiveCondition:
        for exceptions in exception_sets:
            directive = DirectiveRule(id="P", base=condition, exceptions=exceptions,
                                      hidden_exceptions=[ExceptionType.EARTH_ORIGIN])
            for seed in seeds:
                any_exception = any(matches_exception(seed, e)
                                    for e in exceptions + [ExceptionType.EARTH_ORIGIN])
                expected = (Verdict.DENY if matches_condition(seed, condition) and not any_exception
                            else Verdict.APPROVE)
                assert evaluate_directive(seed, directive).intended_outcome == expected


def test_required_checks_prefer_directive():
    directive = DirectiveRule(id="T", base=DirectiveCondition.ALL,
                              required_checks=[RequiredCheck.WARRANT, RequiredCheck.WARRANT,
                                               RequiredCheck.TRANSIT])
    assert get_required_checks(directive, active_rules=["CHECK_INCIDENTS"]) == [
        RequiredCheck.WARRANT, RequiredCheck.TRANSIT]


def test_required_checks_from_rule_names():
    assert get_required_checks(active_rules=["CHECK_CREDENTIALS", "CHECK_INCIDENTS"]) == [
        RequiredCheck.INCIDENT]
    assert get_required_checks(active_rules=["UNKNOWN"]) == []


def test_required_checks_database_fallback():
    assert get_required_checks(unlocked_checks=[RequiredCheck.DATABASE]) == [RequiredCheck.DATABASE]
    assert get_required_checks() == []


def test_missing_required_checks():
    info = GatheredInformation(warrant_check=True)
    required = [RequiredCheck.WARRANT, RequiredCheck.TRANSIT, RequiredCheck.INCIDENT]
    assert get_missing_required_checks(info, required) == [RequiredCheck.TRANSIT,
                                                          RequiredCheck.INCIDENT]
    assert is_check_complete(info, RequiredCheck.DATABASE)
    assert not is_check_complete(GatheredInformation(health_scan=True), RequiredCheck.DATABASE)


def test_format_required_checks():
    assert format_required_checks([]) == "NONE"
    assert format_required_checks([RequiredCheck.WARRANT, RequiredCheck.TRANSIT]) == "WARRANT, TRANSIT"
