from src.school_admin.school_admin.attendance.factory import DutyStrategyFactory
from src.school_admin.school_admin.attendance.strategies.out_of_range_strategy import OutOfRangeStrategy
from src.school_admin.school_admin.attendance.strategies.within_range_strategy import WithinRangeStrategy
from src.school_admin.school_admin.core.enums import DutyStatus


def test_factory_on_the_radius_is_within_range():
    factory = DutyStrategyFactory()
    strategy = factory.for_distance(distance=200, radius=200)

    assert isinstance(strategy, WithinRangeStrategy)
    decision = strategy.decide(distance=200, radius=200)
    assert decision.status == DutyStatus.WITHIN_RANGE
    assert not decision.requires_confirmation


def test_factory_beyond_radius_needs_confirmation():
    factory = DutyStrategyFactory()
    strategy = factory.for_distance(distance=201, radius=200)

    assert isinstance(strategy, OutOfRangeStrategy)
    decision = strategy.decide(distance=201, radius=200)
    assert decision.status == DutyStatus.OUT_OF_RANGE
    assert decision.requires_confirmation
    assert "201" in decision.note
