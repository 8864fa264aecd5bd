from darkhorse.analytics.collapse import collapse, resistance_map, window_size
from darkhorse.analytics.frequency import combine
from darkhorse.core.records import HitRecord, HitStatus, SlotType
from conftest import FixedRandom

EMPTY = combine([], [])


def test_window_size():
    assert window_size(0.0) == 1
    assert window_size(0.5) == 1
    assert window_size(0.6) == 2
    assert window_size(1.0) == 3


def test_zero_entropy_picks_lowest_resistance():
    analysis = combine([[[7, 7, 7, 7]]], [])
    for v in (0.0, 0.5, 0.99):
        assert collapse(analysis, [], 0.0, 0, 1, rng=FixedRandom(v)) == 7


def test_ties_resolve_by_digit_order():
    assert collapse(EMPTY, [], 0.0, 0, 1, rng=FixedRandom(0.0)) == 0


def test_returns_digit_for_any_entropy():
    analysis = combine([[[1, 2, 3, 4], [5, 6, 7, 8]]], [])
    for e in (0.0, 0.25, 0.5, 0.75, 1.0):
        for v in (0.0, 0.5, 0.999):
            assert 0 <= collapse(analysis, [], e, 2, 3, [1], rng=FixedRandom(v)) <= 9


def test_wide_window_reaches_third_candidate():
    analysis = combine([[[5, 5, 5, 5], [6, 6, 6], [7, 7]]], [])
    # resistance order: 5, 6, 7, 0, ...
    assert collapse(analysis, [], 1.0, 0, 2, rng=FixedRandom(0.99)) == 7


def test_out_of_range_index_falls_back_to_lowest():
    analysis = combine([[[4, 4, 4, 4]]], [])
    assert collapse(analysis, [], 1.0, 0, 1, rng=FixedRandom(20.0)) == 4
    assert collapse(analysis, [], 1.0, 0, 1, rng=FixedRandom(-1.0)) == 4


def test_repetition_raises_resistance():
    analysis = combine([[[3, 1, 2, 3], [3, 5, 6, 7]]], [])
    for e in (0.0, 0.45, 1.0):
        base = resistance_map(analysis, [], e, 2, 2, [])
        repeated = resistance_map(analysis, [], e, 2, 2, [3, 3])
        assert repeated[3] > base[3]
        assert repeated[1] == base[1]


def test_exact_hits_only_count_at_their_rank():
    hits = [
        HitRecord(value="9999", type=SlotType.MILHAR, position=1, status=HitStatus.EXACT),
        HitRecord(value="8888", type=SlotType.MILHAR, position=1, status=HitStatus.NEAR),
    ]
    assert collapse(EMPTY, hits, 0.0, 0, 1, rng=FixedRandom(0.0)) == 9
    assert collapse(EMPTY, hits, 0.0, 0, 2, rng=FixedRandom(0.0)) == 0
    res = resistance_map(EMPTY, hits, 0.0, 0, 1)
    assert res[9] == 100 - 35
    assert res[8] == 100
