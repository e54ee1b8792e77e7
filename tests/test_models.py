import json

import pytest

from models import (
    TruthFlags, Verdict, directive_from_dict, directive_to_dict, seed_from_dict,
    subject_to_dict, subject_to_json, evidence_to_dict, ExceptionType, ToneTieredResponse,
    SubjectType, TellType, Tone, GatheredInformation,
)
from director import build_subject_from_seed
from evidence import create_subject_evidence
from shift_roster import load_shift_roster

SEED_JSON = {
    "id": "X-01",
    "seed": 42,
    "subject_type": "REPLICANT",
    "hierarchy_tier": "LOWER",
    "origin": "TITAN",
    "truth_flags": {"has_transit_issue": True},
    "bpm_tells": {"type": "CONTRADICTION", "base_elevation": 20},
    "interrogation_responses": {
        "origin": "Titan.",
        "purpose": {"soft": "Visiting.", "harsh": "None of your business."},
    },
}


def test_seed_from_dict():
    seed = seed_from_dict(SEED_JSON)
    assert seed.subject_type == SubjectType.REPLICANT
    assert seed.truth_flags == TruthFlags(has_transit_issue=True)
    assert seed.bpm_tells.type == TellType.CONTRADICTION
    assert seed.interrogation_responses.lookup("origin") == "Titan."
    purpose = seed.interrogation_responses.lookup("purpose")
    assert isinstance(purpose, ToneTieredResponse)
    assert purpose.resolve(Tone.FIRM) == "Visiting."


def test_seed_from_dict_rejects_unknown_enum():
    with pytest.raises(ValueError):
        seed_from_dict(dict(SEED_JSON, origin="PLUTO"))
    with pytest.raises(KeyError):
        seed_from_dict({"seed": 1})


@pytest.mark.parametrize("value", ["false", "true", 1, 0, None])
def test_seed_from_dict_rejects_non_boolean_flags(value):
    with pytest.raises(ValueError):
        seed_from_dict(dict(SEED_JSON, truth_flags={"has_warrant": value}))
    with pytest.raises(ValueError):
        seed_from_dict(dict(SEED_JSON, bpm_tells={"type": "CONTRADICTION", "is_good_liar": value}))


@pytest.mark.parametrize("section", ["truth_flags", "bpm_tells", "dossier", "interrogation_responses"])
def test_seed_from_dict_rejects_non_object_sections(section):
    with pytest.raises(ValueError):
        seed_from_dict(dict(SEED_JSON, **{section: "CONTRADICTION"}))


def test_directive_round_trip_hides_hidden_exceptions():
    directive = directive_from_dict({
        "id": "D", "base": "SYNTHETICS", "exceptions": ["CYBORG"],
        "hidden_exceptions": ["EMERGENCY"], "required_checks": ["WARRANT"],
    })
    assert directive.hidden_exceptions == [ExceptionType.EMERGENCY]
    assert "hidden_exceptions" not in directive_to_dict(directive)
    assert directive_to_dict(directive, include_hidden=True)["hidden_exceptions"] == ["EMERGENCY"]
    with pytest.raises(ValueError):
        directive_from_dict({"base": "EVERYONE"})


def test_player_view_has_no_ground_truth():
    directive, seeds = load_shift_roster("SHIFT_1")
    subject = build_subject_from_seed(seeds[0], directive)
    view = subject_to_dict(subject)
    for key in ("intended_outcome", "truth_flags", "exception_tags", "bpm_tells",
                "interrogation_responses"):
        assert key not in view
    assert view["has_custom_responses"] is True
    assert set(view["evidence_outputs"]) == {"WARRANT", "TRANSIT", "INCIDENT"}

    full = json.loads(subject_to_json(subject, include_truth=True))
    assert full["intended_outcome"] == Verdict.APPROVE.value
    assert full["truth_flags"]["has_transit_issue"] is True


def test_evidence_to_dict_is_json_ready():
    evidence = create_subject_evidence(seed_from_dict(SEED_JSON))
    data = evidence_to_dict(evidence)
    json.dumps(data)
    assert data["warrants"] == "NONE"


def test_gathered_information_progress():
    assert not GatheredInformation().has_some()
    assert GatheredInformation(health_scan=True).has_some()
    assert not GatheredInformation(health_scan=True).has_all()
    assert GatheredInformation(True, True, True, True, True).has_all()
