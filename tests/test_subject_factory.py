import re

import pytest

from models import SubjectType, HierarchyTier, OriginWorld, Dossier, SubjectRole
from subject_factory import (
    SubjectTraits, FactoryConfig, create_subject_from_traits, validate_trait_combination,
    all_trait_combinations, generate_traits_from_seed, generate_biometric_data,
)


def test_invalid_combinations_rejected():
    for subject_type in (SubjectType.REPLICANT, SubjectType.AMPUTEE):
        traits = SubjectTraits(subject_type, HierarchyTier.VIP, OriginWorld.EARTH)
        assert not validate_trait_combination(traits)["valid"]
        with pytest.raises(ValueError):
            create_subject_from_traits(traits)
    robot = SubjectTraits(SubjectType.ROBOT_CYBORG, HierarchyTier.LOWER, OriginWorld.IO)
    assert validate_trait_combination(robot)["reason"]


def test_all_combinations_are_valid():
    combos = all_trait_combinations()
    assert combos
    assert all(validate_trait_combination(t)["valid"] for t in combos)
    assert generate_traits_from_seed(len(combos)) == combos[0]


def test_same_seed_same_subject():
    traits = SubjectTraits(SubjectType.HUMAN, HierarchyTier.UPPER, OriginWorld.MARS)
    a = create_subject_from_traits(traits, "F", FactoryConfig(seed=7))
    b = create_subject_from_traits(traits, "F", FactoryConfig(seed=7))
    assert a == b


def test_generated_identity_shape():
    traits = SubjectTraits(SubjectType.HUMAN_CYBORG, HierarchyTier.STANDARD, OriginWorld.TITAN)
    subject = create_subject_from_traits(traits, "M", FactoryConfig(seed=12))
    assert re.fullmatch(r"TT-\d{4}-SHC", subject.id)
    assert 72 <= subject.base_bpm <= 81
    assert subject.dossier.name == subject.name
    assert subject.dossier.sex == "MALE"
    assert subject.greeting_text.startswith(subject.name)


def test_manual_overrides_win():
    traits = SubjectTraits(SubjectType.HUMAN, HierarchyTier.LOWER, OriginWorld.IO)
    dossier = Dossier(name="X", occupation="Courier")
    subject = create_subject_from_traits(traits, "M", FactoryConfig(seed=1, manual_overrides={
        "name": "RAY OKAFOR", "id": "IO-9", "dossier": dossier,
        "role": SubjectRole.ENGINEER, "destination": "MARS", "greeting_text": None,
    }))
    assert subject.name == "RAY OKAFOR"
    assert subject.id == "IO-9"
    assert subject.dossier is dossier
    assert subject.role == SubjectRole.ENGINEER
    assert subject.destination == "MARS"


def test_scan_data_follows_type():
    assert generate_biometric_data(SubjectType.HUMAN)["anomaly_detected"] is False
    replicant = generate_biometric_data(SubjectType.REPLICANT)
    assert replicant["fingerprint_match"] is False
    assert replicant["anomaly_type"] == "REPLICANT"

    traits = SubjectTraits(SubjectType.ROBOT_CYBORG, HierarchyTier.UPPER, OriginWorld.IO)
    subject = create_subject_from_traits(traits, "X", FactoryConfig(seed=3))
    assert subject.bio_scan_data["augmentation_level"] == "MAJOR"
    assert subject.dossier.sex == "UNKNOWN"
