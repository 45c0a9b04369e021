import pytest

from delve.rng import RandomSource


def test_same_seed_replays_same_stream():
    a = RandomSource(99)
    b = RandomSource(99)
    assert [a.randint(0, 100) for _ in range(20)] == [b.randint(0, 100) for _ in range(20)]


def test_weighted_choice_never_picks_zero_weight():
    rng = RandomSource(5)
    picks = {rng.weighted_choice({"orc": 80, "troll": 0}) for _ in range(200)}
    assert picks == {"orc"}


def test_weighted_choice_roughly_follows_weights():
    rng = RandomSource(11)
    picks = [rng.weighted_choice({"a": 1, "b": 3}) for _ in range(2000)]
    share_b = picks.count("b") / len(picks)
    assert 0.65 < share_b < 0.85


def test_weighted_choice_rejects_all_zero_and_negative():
    rng = RandomSource(1)
    with pytest.raises(ValueError):
        rng.weighted_choice({"a": 0, "b": 0})
    with pytest.raises(ValueError):
        rng.weighted_choice({"a": 5, "b": -1})


def test_state_roundtrip_resumes_stream():
    rng = RandomSource(3)
    rng.randint(0, 10)
    state = rng.getstate()
    expected = [rng.randint(0, 1000) for _ in range(5)]
    rng.setstate(state)
    assert [rng.randint(0, 1000) for _ in range(5)] == expected
