import pytest

from rng import SeededRandom, hash_string, MASK_32


def test_first_draw_from_state_one():
    # 1 -> 8193 -> 8193 -> 270369
    assert SeededRandom(1).next() == 270369 / MASK_32


def test_same_seed_same_sequence():
    a, b = SeededRandom(1234), SeededRandom(1234)
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


def test_different_seeds_diverge():
    a, b = SeededRandom(1), SeededRandom(2)
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]


def test_zero_seed_is_replaced():
    assert SeededRandom(0).next() == SeededRandom(1).next()


def test_string_seed_hashes():
    assert hash_string("") == 5381
    a, b = SeededRandom("S1-01:origin"), SeededRandom(hash_string("S1-01:origin"))
    assert [a.next() for _ in range(10)] == [b.next() for _ in range(10)]


def _djb2(units):
    h = 5381
    for unit in units:
        h = (((h << 5) + h) & MASK_32) ^ unit
    return h


def test_hash_string_ascii():
    assert hash_string("a") == 177604
    assert hash_string("S1-01") == _djb2([ord(c) for c in "S1-01"])


def test_hash_string_uses_surrogate_pairs():
    # U+1F600 is the pair D83D DE00, two units not one code point
    assert hash_string("seed\U0001F600") == _djb2([ord(c) for c in "seed"] + [0xD83D, 0xDE00])
    assert hash_string("\U0001F600") != _djb2([0x1F600])


def test_next_in_unit_interval():
    rng = SeededRandom(99)
    assert all(0.0 <= rng.next() <= 1.0 for _ in range(2000))


def test_int_is_inclusive_and_bounded():
    rng = SeededRandom(7)
    values = {rng.int(1, 4) for _ in range(2000)}
    assert values == {1, 2, 3, 4}


def test_pick_empty_raises():
    with pytest.raises(ValueError):
        SeededRandom(1).pick([])
    with pytest.raises(ValueError):
        SeededRandom(1).pick_many([], 2)


def test_pick_many_without_replacement():
    rng = SeededRandom(5)
    items = ["a", "b", "c", "d", "e"]
    for count in range(1, 8):
        picks = rng.pick_many(items, count)
        assert len(picks) == min(count, len(items))
        assert len(set(picks)) == len(picks)
        assert set(picks) <= set(items)


def test_bool_probability_extremes():
    rng = SeededRandom(11)
    assert not any(rng.bool(0.0) for _ in range(100))
    assert all(rng.bool(1.01) for _ in range(100))


def test_audit_trail_records_draws():
    rng = SeededRandom(3, audit=True)
    rng.int(1, 6)
    rng.pick(["x", "y"])
    assert [h["op"] for h in rng.history] == ["int", "pick"]
    assert rng.draws == 2


def test_no_audit_by_default():
    rng = SeededRandom(3)
    rng.int(1, 6)
    assert rng.history == []


def test_range_bounds():
    rng = SeededRandom(21)
    assert all(2.5 <= rng.range(2.5, 7.5) <= 7.5 for _ in range(500))


def test_gaussian_is_reproducible_and_centered():
    a, b = SeededRandom(8), SeededRandom(8)
    samples = [a.gaussian(100, 15) for _ in range(2000)]
    assert samples[:10] == [b.gaussian(100, 15) for _ in range(10)]
    assert 95 < sum(samples) / len(samples) < 105
