"""
AMBER Checkpoint v1.0 — Subject Director
Composition root: seed + directive -> fully enriched subject.

The director draws nothing itself. Evidence and factory each seed their own
generator from seed.seed, so two builds of the same seed under the same
directive are identical, and evidence and verdict always agree on the
truth flags.
"""

import logging

from models import SubjectSeed, SubjectData, DirectiveRule
from evidence import create_subject_evidence
from directives import evaluate_directive
from subject_factory import SubjectTraits, FactoryConfig, create_subject_from_traits

logger = logging.getLogger("amber.director")


def _manual_overrides(seed: SubjectSeed) -> dict:
    return {
        "name": seed.name or None,
        "id": seed.id,
        "origin": seed.origin,
        "role": seed.role,
        "reason_for_visit": seed.reason_for_visit or None,
        "destination": seed.destination,
        "greeting_text": seed.greeting_text or None,
        "dossier": seed.dossier,
        "bpm_tells": seed.bpm_tells,
        "interrogation_responses": seed.interrogation_responses,
    }


def build_subject_from_seed(seed: SubjectSeed, directive: DirectiveRule,
                            factory=create_subject_from_traits) -> SubjectData:
    """
    factory(traits, sex, config) -> SubjectData is the external collaborator;
    any callable with that shape can be passed in.
    """
    traits = SubjectTraits(seed.subject_type, seed.hierarchy_tier, seed.origin)
    subject = factory(traits, seed.sex, FactoryConfig(
        seed=seed.seed,
        manual_overrides=_manual_overrides(seed),
        use_procedural_portrait=True,
    ))

    evidence = create_subject_evidence(seed)
    evaluation = evaluate_directive(seed, directive)

    subject.warrants = evidence.warrants
    subject.warrant_description = evidence.warrant_description
    subject.incidents = evidence.incidents
    subject.database_query = evidence.database_query
    subject.verification_record = evidence.verification_record
    subject.evidence_outputs = evidence.outputs

    subject.intended_outcome = evaluation.intended_outcome
    subject.required_checks = list(directive.required_checks)
    subject.truth_flags = seed.truth_flags
    subject.exception_tags = list(seed.exception_tags)
    subject.seed = seed.seed

    logger.info(f"Built {subject.id} under {directive.id}: "
                f"{evaluation.intended_outcome.value} "
                f"(declared={[e.value for e in evaluation.declared_exceptions]}, "
                f"hidden={len(evaluation.hidden_exceptions)})")
    return subject


build = build_subject_from_seed


def build_shift_subjects(seeds, directive: DirectiveRule,
                         factory=create_subject_from_traits) -> list:
    """Build a shift roster in order. Each subject is independent."""
    return [build_subject_from_seed(s, directive, factory) for s in seeds]
