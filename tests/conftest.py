import pytest

from models import (
    SubjectSeed, SubjectType, HierarchyTier, OriginWorld, TruthFlags, DirectiveRule,
    DirectiveCondition, ExceptionType, RequiredCheck,
)
from checkpoint_loop import CheckpointLoop


@pytest.fixture
def make_seed():
    """Seed builder with plain defaults; override any field by keyword."""
    def _make(**overrides):
        fields = dict(
            id="T-01",
            seed=42,
            subject_type=SubjectType.HUMAN,
            hierarchy_tier=HierarchyTier.STANDARD,
            origin=OriginWorld.MARS,
            truth_flags=TruthFlags(),
        )
        fields.update(overrides)
        return SubjectSeed(**fields)
    return _make


@pytest.fixture
def warrants_except_vip():
    return DirectiveRule(
        id="TEST_WARRANTS",
        base=DirectiveCondition.WARRANTS,
        exceptions=[ExceptionType.VIP],
        required_checks=[RequiredCheck.WARRANT],
    )


@pytest.fixture
def loop():
    game = CheckpointLoop()
    game.start_shift("SHIFT_1")
    return game
