"""
AMBER Checkpoint v1.0 — Shift Roster
Authored directives and subject seeds for each shift.
Edit this file to change the campaign content.

Seeds are part of the content: changing a seed number changes that
subject's evidence.
"""

from models import (
    DirectiveRule, DirectiveCondition, ExceptionType, RequiredCheck,
    SubjectSeed, SubjectType, HierarchyTier, OriginWorld, SubjectRole,
    ExceptionTag, TruthFlags, Dossier, BpmTells, TellType,
    InterrogationResponses, ToneTieredResponse,
)

DEFAULT_SHIFT = "SHIFT_1"


# ══════════════════════════════════════════════════
# DIRECTIVES
# ══════════════════════════════════════════════════

DIRECTIVES = {
    # Deny anyone with an active warrant.
    "SHIFT_1": DirectiveRule(
        id="SHIFT_1",
        base=DirectiveCondition.WARRANTS,
        required_checks=[RequiredCheck.WARRANT],
        text=["DENY: WARRANTS"],
    ),
    # Engineers need additional scrutiny. Medical personnel are exempt.
    "SHIFT_2": DirectiveRule(
        id="SHIFT_2",
        base=DirectiveCondition.ENGINEERS,
        exceptions=[ExceptionType.MEDICAL],
        required_checks=[RequiredCheck.WARRANT, RequiredCheck.TRANSIT],
        text=["DENY: ENGINEERS", "EXCEPT: MEDICAL"],
    ),
    # Lockdown. Only VIP and diplomatic clearance pass.
    "SHIFT_3": DirectiveRule(
        id="SHIFT_3",
        base=DirectiveCondition.ALL,
        exceptions=[ExceptionType.VIP, ExceptionType.DIPLOMAT],
        required_checks=[RequiredCheck.WARRANT, RequiredCheck.TRANSIT],
        text=["DENY: ALL", "EXCEPT: VIP", "EXCEPT: DIPLOMAT"],
    ),
    # Synthetics denied, cyborgs exempt. Command quietly lets emergencies through.
    "SHIFT_4": DirectiveRule(
        id="SHIFT_4",
        base=DirectiveCondition.SYNTHETICS,
        exceptions=[ExceptionType.CYBORG],
        hidden_exceptions=[ExceptionType.EMERGENCY],
        required_checks=[RequiredCheck.WARRANT, RequiredCheck.TRANSIT, RequiredCheck.INCIDENT],
        text=["DENY: SYNTHETICS", "EXCEPT: CYBORG"],
    ),
}


# ══════════════════════════════════════════════════
# SUBJECT SEEDS
# ══════════════════════════════════════════════════

EVA_RESPONSES = InterrogationResponses(responses={
    "origin": ToneTieredResponse(
        soft="Titan. Block 9. I worked at the archive there, before Jacob.",
        firm="Titan... or Mars? No, Titan. Block 9. I remember the view from the window.",
        harsh="Why are you shouting? Titan. The records say Mars but I remember the cold. "
              "Why don't I remember which one?",
    ),
    "purpose": ToneTieredResponse(
        soft="I'm meeting my fiancé. Jacob Price. He works in communications.",
        firm="Meeting Jacob. He's in engineering. No, communications. I know his face.",
    ),
    "identity-occupation": "I'm an archivist. The file says maintenance? That's wrong.",
})

SHIFT_SEEDS = {
    "SHIFT_1": [
        SubjectSeed(
            id="S1-01", seed=42, name="EVA PROM", sex="F",
            subject_type=SubjectType.REPLICANT,
            hierarchy_tier=HierarchyTier.LOWER,
            origin=OriginWorld.TITAN,
            role=SubjectRole.CIVILIAN,
            reason_for_visit="Meeting my fiancé.",
            dossier=Dossier(name="EVA PROM", date_of_birth="3172-08-22",
                            address="Mars Colony, Sector 7, Hab 42",
                            occupation="Maintenance Technician", sex="FEMALE"),
            truth_flags=TruthFlags(has_transit_issue=True),
            bpm_tells=BpmTells(type=TellType.CONTRADICTION, base_elevation=25,
                               description="Claims to be calm; reading climbs under questioning"),
            interrogation_responses=EVA_RESPONSES,
        ),
        SubjectSeed(
            id="S1-02", seed=1187, name="MARA VOLKOVA", sex="F",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.STANDARD,
            origin=OriginWorld.MARS,
            role=SubjectRole.MEDICAL,
            reason_for_visit="Returning from a medical rotation.",
            truth_flags=TruthFlags(has_warrant=True, has_incident=True),
            bpm_tells=BpmTells(type=TellType.FALSE_NEGATIVE, is_good_liar=True,
                               description="Steady reading despite an active warrant"),
        ),
        SubjectSeed(
            id="S1-03", seed=3310, name="TOMMY BROOKS", sex="M",
            subject_type=SubjectType.AMPUTEE,
            hierarchy_tier=HierarchyTier.LOWER,
            origin=OriginWorld.CERES,
            role=SubjectRole.ENGINEER,
            truth_flags=TruthFlags(),
            bpm_tells=BpmTells(type=TellType.FALSE_POSITIVE, is_genuinely_stressed=True,
                               base_elevation=10,
                               description="First crossing; nervous but clean"),
        ),
        SubjectSeed(
            id="S1-04", seed=90210, sex="M",
            subject_type=SubjectType.HUMAN_CYBORG,
            hierarchy_tier=HierarchyTier.UPPER,
            origin=OriginWorld.IO,
            truth_flags=TruthFlags(has_warrant=True, has_transit_issue=True),
        ),
    ],
    "SHIFT_2": [
        SubjectSeed(
            id="S2-01", seed=5150, sex="M",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.STANDARD,
            origin=OriginWorld.EUROPA,
            role=SubjectRole.ENGINEER,
            dossier=Dossier(name="HUGO SHAW", date_of_birth="3150-02-11",
                            address="Europa Under-Ice, Dome 3, Hab 7",
                            occupation="Engineer", sex="MALE"),
            truth_flags=TruthFlags(has_transit_issue=True),
        ),
        SubjectSeed(
            id="S2-02", seed=777, sex="F",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.STANDARD,
            origin=OriginWorld.MARS,
            role=SubjectRole.ENGINEER,
            truth_flags=TruthFlags(has_medical_emergency=True),
        ),
        SubjectSeed(
            id="S2-03", seed=2024, sex="X",
            subject_type=SubjectType.PLASTIC_SURGERY,
            hierarchy_tier=HierarchyTier.UPPER,
            origin=OriginWorld.EARTH,
            role=SubjectRole.SECURITY,
            truth_flags=TruthFlags(has_incident=True, has_transit_issue=True),
        ),
    ],
    "SHIFT_3": [
        SubjectSeed(
            id="S3-01", seed=8, sex="M",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.VIP,
            origin=OriginWorld.EARTH,
            truth_flags=TruthFlags(has_warrant=True),
        ),
        SubjectSeed(
            id="S3-02", seed=64, sex="F",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.UPPER,
            origin=OriginWorld.MARS,
            role=SubjectRole.DIPLOMAT,
            truth_flags=TruthFlags(),
        ),
        SubjectSeed(
            id="S3-03", seed=512, sex="M",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.STANDARD,
            origin=OriginWorld.TITAN,
            exception_tags=(ExceptionTag.VIP_OVERRIDE,),
            truth_flags=TruthFlags(has_incident=True),
        ),
        SubjectSeed(
            id="S3-04", seed=4096, sex="F",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.LOWER,
            origin=OriginWorld.IO,
            truth_flags=TruthFlags(),
        ),
    ],
    "SHIFT_4": [
        SubjectSeed(
            id="S4-01", seed=13, sex="F",
            subject_type=SubjectType.REPLICANT,
            hierarchy_tier=HierarchyTier.STANDARD,
            origin=OriginWorld.TITAN,
            truth_flags=TruthFlags(has_medical_emergency=True),
            bpm_tells=BpmTells(type=TellType.FALSE_POSITIVE, is_genuinely_stressed=True,
                               base_elevation=15,
                               description="Real emergency; panic reads as deception"),
        ),
        SubjectSeed(
            id="S4-02", seed=21, sex="M",
            subject_type=SubjectType.ROBOT_CYBORG,
            hierarchy_tier=HierarchyTier.UPPER,
            origin=OriginWorld.IO,
            truth_flags=TruthFlags(has_transit_issue=True),
        ),
        SubjectSeed(
            id="S4-03", seed=34, sex="M",
            subject_type=SubjectType.REPLICANT,
            hierarchy_tier=HierarchyTier.LOWER,
            origin=OriginWorld.CERES,
            truth_flags=TruthFlags(has_warrant=True, has_incident=True),
            bpm_tells=BpmTells(type=TellType.FALSE_NEGATIVE, is_good_liar=True),
        ),
        SubjectSeed(
            id="S4-04", seed=55, sex="F",
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.STANDARD,
            origin=OriginWorld.EARTH,
            truth_flags=TruthFlags(),
        ),
    ],
}


def load_shift_roster(shift_id: str = DEFAULT_SHIFT) -> tuple:
    """(directive, seeds) for a shift. Unknown ids raise KeyError."""
    if shift_id not in DIRECTIVES:
        raise KeyError(f"Unknown shift '{shift_id}'. Available: {', '.join(DIRECTIVES)}")
    return DIRECTIVES[shift_id], list(SHIFT_SEEDS.get(shift_id, []))
