"""
AMBER Checkpoint v1.0 — Subject Factory
Default implementation of the factory the director calls to turn
demographic traits into a named, documented individual.

Deterministic: everything is drawn from a generator seeded with
config.seed. Manual overrides always win over generated values.
"""

from dataclasses import dataclass, field
from typing import Optional

from models import (
    SubjectData, SubjectType, HierarchyTier, OriginWorld, Dossier,
)
from rng import SeededRandom

FACTORY_SALT = 0x5EED
CURRENT_YEAR = 3184


@dataclass(frozen=True)
class SubjectTraits:
    subject_type: SubjectType
    hierarchy_tier: HierarchyTier
    origin: OriginWorld


@dataclass
class FactoryConfig:
    seed: Optional[int] = None
    manual_overrides: dict = field(default_factory=dict)
    use_procedural_portrait: bool = False


# ─────────────────────────────────────────────────────
# TRAIT VALIDATION
# ─────────────────────────────────────────────────────

def validate_trait_combination(traits: SubjectTraits) -> dict:
    """Returns {valid: bool, reason: str or None}."""
    if traits.hierarchy_tier == HierarchyTier.VIP and traits.subject_type in (
            SubjectType.REPLICANT, SubjectType.AMPUTEE):
        return {"valid": False,
                "reason": "VIP tier is reserved for human and human-cyborg executives"}
    if traits.subject_type == SubjectType.ROBOT_CYBORG and traits.hierarchy_tier == HierarchyTier.LOWER:
        return {"valid": False,
                "reason": "Robot cyborgs are corporate assets, not lower tier"}
    return {"valid": True, "reason": None}


def all_trait_combinations() -> list:
    combos = []
    for subject_type in SubjectType:
        for tier in HierarchyTier:
            for origin in OriginWorld:
                traits = SubjectTraits(subject_type, tier, origin)
                if validate_trait_combination(traits)["valid"]:
                    combos.append(traits)
    return combos


def generate_traits_from_seed(seed: int) -> SubjectTraits:
    combos = all_trait_combinations()
    return combos[seed % len(combos)]


# ─────────────────────────────────────────────────────
# NAME / ID / REASON POOLS
# ─────────────────────────────────────────────────────

FIRST_NAMES = {
    OriginWorld.EARTH: {"M": ["James", "Daniel", "Luis", "Ethan"],
                        "F": ["Sarah", "Emily", "Hannah", "Maya"]},
    OriginWorld.MARS: {"M": ["Omar", "Caleb", "Marcus", "Noah"],
                       "F": ["Priya", "Nina", "Jasmine", "Olivia"]},
    OriginWorld.TITAN: {"M": ["Kevin", "Victor", "Evan", "Tommy"],
                        "F": ["Laura", "Grace", "Lena", "Ava"]},
    OriginWorld.IO: {"M": ["Jordan", "Casey", "Taylor", "Avery"],
                     "F": ["Morgan", "Riley", "Quinn", "Casey"]},
    OriginWorld.EUROPA: {"M": ["Hugo", "Cal", "Reed", "Cole"],
                         "F": ["Nora", "Iris", "Clara", "Zoe"]},
    OriginWorld.CERES: {"M": ["Anton", "Felix", "Idris", "Wes"],
                        "F": ["Mara", "Elena", "Tess", "Yara"]},
}

SURNAMES = {
    HierarchyTier.LOWER: ["Miller", "Carter", "Reed", "Brooks"],
    HierarchyTier.STANDARD: ["Lopez", "Nguyen", "Patel", "Shaw"],
    HierarchyTier.UPPER: ["Pierce", "Bennett", "Clark", "Sutton"],
    HierarchyTier.VIP: ["Sinclair", "Sterling", "Harrington", "Prescott"],
}

ORIGIN_CODES = {
    OriginWorld.EARTH: "ER", OriginWorld.MARS: "MR", OriginWorld.TITAN: "TT",
    OriginWorld.IO: "IO", OriginWorld.EUROPA: "EU", OriginWorld.CERES: "CR",
}

TIER_CODES = {
    HierarchyTier.LOWER: "L", HierarchyTier.STANDARD: "S",
    HierarchyTier.UPPER: "U", HierarchyTier.VIP: "V",
}

TYPE_CODES = {
    SubjectType.HUMAN: "H", SubjectType.HUMAN_CYBORG: "HC",
    SubjectType.ROBOT_CYBORG: "RC", SubjectType.REPLICANT: "R",
    SubjectType.PLASTIC_SURGERY: "PS", SubjectType.AMPUTEE: "A",
}

REASONS = {
    HierarchyTier.LOWER: ["Seeking employment opportunities", "Family reunion",
                          "Medical treatment", "Refugee status", "Work permit application"],
    HierarchyTier.STANDARD: ["Business meeting", "Academic conference",
                             "Medical consultation", "Family visit", "Work assignment"],
    HierarchyTier.UPPER: ["Corporate negotiations", "Diplomatic mission",
                          "Executive meeting", "Strategic planning", "High-level consultation"],
    HierarchyTier.VIP: ["Executive briefing", "Closed council meeting", "Security summit",
                        "Private negotiation", "VIP clearance review"],
}

OCCUPATIONS = {
    HierarchyTier.LOWER: ["Dock Worker", "Maintenance Technician", "Hydroponics Tender", "Courier"],
    HierarchyTier.STANDARD: ["Engineer", "Nurse", "Data Archivist", "Logistics Clerk"],
    HierarchyTier.UPPER: ["Research Director", "Surgeon", "Trade Attaché", "Systems Architect"],
    HierarchyTier.VIP: ["Board Executive", "Council Delegate", "Security Minister", "Shipping Magnate"],
}

ADDRESSES = {
    OriginWorld.EARTH: "Lagos Arcology, Tier 12",
    OriginWorld.MARS: "Mars Colony, Sector 7",
    OriginWorld.TITAN: "Titan Station, Block 9",
    OriginWorld.IO: "Io Foundry Habitat, Ring C",
    OriginWorld.EUROPA: "Europa Under-Ice, Dome 3",
    OriginWorld.CERES: "Ceres Spindle, Deck 40",
}


# ─────────────────────────────────────────────────────
# TYPE-DRIVEN SCAN DATA
# ─────────────────────────────────────────────────────

def generate_biometric_data(subject_type: SubjectType) -> dict:
    data = {
        "fingerprint_match": True,
        "retinal_match": True,
        "anomaly_detected": False,
        "anomaly_type": "NONE",
    }
    if subject_type == SubjectType.REPLICANT:
        data.update(fingerprint_match=False, retinal_match=False,
                    anomaly_detected=True, anomaly_type="REPLICANT")
    elif subject_type in (SubjectType.HUMAN_CYBORG, SubjectType.ROBOT_CYBORG):
        data.update(anomaly_detected=True, anomaly_type="CYBORG")
    elif subject_type == SubjectType.PLASTIC_SURGERY:
        data.update(anomaly_detected=True, anomaly_type="SURGERY")
    elif subject_type == SubjectType.AMPUTEE:
        data.update(anomaly_detected=True, anomaly_type="AMPUTEE")
    return data


BIO_SCAN_PROFILES = {
    SubjectType.HUMAN: ("HUMAN", "STANDARD", 100, "NONE"),
    SubjectType.REPLICANT: ("REPLICANT", "SYNTHETIC", 0, "NONE"),
    SubjectType.HUMAN_CYBORG: ("CYBORG", "ENHANCED", 75, "MODERATE"),
    SubjectType.ROBOT_CYBORG: ("CYBORG", "SYNTHETIC", 50, "MAJOR"),
    SubjectType.PLASTIC_SURGERY: ("HUMAN", "MODIFIED", 90, "NONE"),
    SubjectType.AMPUTEE: ("AMPUTEE", "MODIFIED", 95, "NONE"),
}


def generate_bio_scan_data(subject_type: SubjectType) -> dict:
    fingerprint, structure, purity, augmentation = BIO_SCAN_PROFILES[subject_type]
    return {
        "biological_type": subject_type.value,
        "fingerprint_type": fingerprint,
        "bio_structure": structure,
        "genetic_purity": purity,
        "augmentation_level": augmentation,
    }


# ─────────────────────────────────────────────────────
# FACTORY
# ─────────────────────────────────────────────────────

def _generate_dossier(rng: SeededRandom, traits: SubjectTraits, name: str, sex: str) -> Dossier:
    age = rng.int(20, 59)
    month = rng.int(1, 12)
    day = rng.int(1, 28)
    return Dossier(
        name=name,
        date_of_birth=f"{CURRENT_YEAR - age}-{month:02d}-{day:02d}",
        address=f"{ADDRESSES[traits.origin]}, Hab {rng.int(1, 99)}",
        occupation=rng.pick(OCCUPATIONS[traits.hierarchy_tier]),
        sex={"M": "MALE", "F": "FEMALE"}.get(sex, "UNKNOWN"),
    )


def create_subject_from_traits(traits: SubjectTraits, sex: str = "M",
                               config: FactoryConfig = None) -> SubjectData:
    """
    Build a base subject record. Raises ValueError for trait combinations
    the setting does not allow.
    """
    config = config or FactoryConfig()
    validation = validate_trait_combination(traits)
    if not validation["valid"]:
        raise ValueError(f"Invalid trait combination: {validation['reason']}")

    overrides = dict(config.manual_overrides)
    rng = SeededRandom((config.seed or 0) ^ FACTORY_SALT)

    first_names = FIRST_NAMES[traits.origin].get(sex) or FIRST_NAMES[traits.origin]["F"]
    name = f"{rng.pick(first_names)} {rng.pick(SURNAMES[traits.hierarchy_tier])}"
    id_code = (f"{ORIGIN_CODES[traits.origin]}-{rng.int(0, 9999):04d}-"
               f"{TIER_CODES[traits.hierarchy_tier]}{TYPE_CODES[traits.subject_type]}")
    reason = rng.pick(REASONS[traits.hierarchy_tier])
    base_bpm = 72 + rng.int(0, 9)

    name = overrides.pop("name", None) or name
    dossier = _generate_dossier(rng, traits, name, sex)
    manual_dossier = overrides.pop("dossier", None)
    if manual_dossier:
        dossier = manual_dossier

    subject = SubjectData(
        name=name,
        id=overrides.pop("id", None) or id_code,
        sex=sex,
        subject_type=traits.subject_type,
        hierarchy_tier=traits.hierarchy_tier,
        origin=traits.origin,
        reason_for_visit=overrides.pop("reason_for_visit", None) or reason,
        dossier=dossier,
        base_bpm=base_bpm,
        biometric_data=generate_biometric_data(traits.subject_type),
        bio_scan_data=generate_bio_scan_data(traits.subject_type),
        use_procedural_portrait=config.use_procedural_portrait,
    )

    # Remaining overrides (origin, destination, greeting, tells, responses, role)
    for key, value in overrides.items():
        if value is not None and hasattr(subject, key):
            setattr(subject, key, value)

    if not subject.greeting_text:
        subject.greeting_text = f"{subject.name}. {subject.reason_for_visit}."

    return subject
