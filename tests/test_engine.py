import itertools
import random

import numpy as np
import pytest
from mastermind.engine import (
    DEFAULT_CONFIG, Combination, GameConfig, all_combinations, codes_of, compute_score,
    filter_candidates, is_consistent, matches_score, score_index, score_table,
    InvalidCombination, parse_combination, parse_peg_count, parse_score, validate_score,
)

C = Combination.make


# --- configuration ---

def test_default_config_derived_constants():
    cfg = DEFAULT_CONFIG
    assert (cfg.positions, cfg.colors) == (4, 8)
    assert cfg.bits_per_position == 3
    assert cfg.mask == 0b111
    assert cfg.total_configs == 4096
    assert cfg.win_score == (4, 0)
    assert len(cfg.all_scores) == 14
    assert (3, 1) not in cfg.all_scores
    assert cfg.opening_values == (0, 0, 1, 1)


@pytest.mark.parametrize("positions,colors,bits", [
    (3, 32, 5),
    (4, 16, 4),
    (5, 8, 3),
    (6, 4, 2),
    (4, 6, 3),
])
def test_config_fits_16_bits(positions, colors, bits):
    cfg = GameConfig(positions=positions, colors=colors)
    assert cfg.bits_per_position == bits
    assert cfg.total_configs == colors ** positions


@pytest.mark.parametrize("positions,colors", [(5, 16), (0, 8), (4, 1), (9, 4)])
def test_config_rejects_bad_shapes(positions, colors):
    with pytest.raises(ValueError):
        GameConfig(positions=positions, colors=colors)


def test_score_domain_tracks_positions():
    cfg = GameConfig(positions=3, colors=6)
    assert cfg.all_scores == ((0, 0), (0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2), (2, 0), (3, 0))
    assert cfg.opening_values == (0, 1, 1)


# --- combinations ---

def test_make_and_get():
    p = C(2, 5, 0, 7)
    assert [p.get(i) for i in range(4)] == [2, 5, 0, 7]
    assert p.values() == (2, 5, 0, 7)
    assert list(p) == [2, 5, 0, 7]
    assert len(p) == 4
    assert repr(p) == "(2, 5, 0, 7)"


@pytest.mark.parametrize("values", [(8, 0, 0, 0), (0, 0, 0, -1), (0, 0, 0), (0, 0, 0, 0, 0)])
def test_make_rejects_invalid(values):
    with pytest.raises(InvalidCombination):
        C(*values)


def test_invalid_combination_is_value_error():
    with pytest.raises(ValueError):
        C(0, 0, 0, 9)


def test_set_returns_updated_copy():
    p = C(0, 0, 0, 0)
    q = p.set(2, 7)
    assert q == C(0, 0, 7, 0)
    assert p == C(0, 0, 0, 0)


def test_set_uses_strict_color_bound():
    with pytest.raises(InvalidCombination):
        C(0, 0, 0, 0).set(1, DEFAULT_CONFIG.colors)


def test_get_out_of_range():
    with pytest.raises(IndexError):
        C(0, 0, 0, 0).get(4)


def test_combination_is_immutable():
    p = C(1, 2, 3, 4)
    with pytest.raises(AttributeError):
        p.value = 0


def test_equality_and_hash_by_value():
    a = C(1, 2, 3, 4)
    b = C(1, 2, 3, 0).set(3, 4)
    assert a == b and a is not b
    assert len({a, b, C(4, 3, 2, 1)}) == 2


def test_successor():
    top = DEFAULT_CONFIG.colors - 1
    assert C(0, 0, 0, 0).successor() == C(1, 0, 0, 0)
    assert C(top, 0, 0, 0).successor() == C(0, 1, 0, 0)
    assert C(top, top, 0, 5).successor() == C(0, 0, 1, 5)
    assert C(top, top, top, top).successor() == C(0, 0, 0, 0)


@pytest.mark.parametrize("positions,colors", [(4, 8), (4, 6), (3, 5)])
def test_successor_enumerates_whole_space_once(positions, colors):
    cfg = GameConfig(positions=positions, colors=colors)
    start = Combination.zero(cfg)
    seen = set()
    c = start
    for _ in range(cfg.total_configs):
        seen.add(c)
        c = c.successor()
    assert c == start
    assert len(seen) == cfg.total_configs
    assert all(v < colors for combo in seen for v in combo)


def test_all_combinations_starts_at_zero_in_successor_order():
    combos = all_combinations(DEFAULT_CONFIG)
    assert len(combos) == 4096
    assert combos[0] == Combination.zero()
    assert combos[1] == C(1, 0, 0, 0)
    assert combos[-1] == C(7, 7, 7, 7)


# --- scoring ---

@pytest.mark.parametrize("attempt,reference,expected", [
    ((0, 1, 2, 3), (0, 1, 2, 3), (4, 0)),
    ((0, 1, 2, 3), (1, 2, 3, 0), (0, 4)),
    ((0, 0, 0, 0), (0, 1, 2, 3), (1, 0)),
    ((0, 1, 2, 3), (0, 0, 0, 0), (1, 0)),
    ((0, 1, 2, 3), (0, 3, 2, 1), (2, 2)),
    ((0, 0, 0, 1), (0, 1, 0, 3), (2, 1)),
    ((0, 0, 1, 1), (2, 5, 0, 7), (0, 1)),
    ((0, 0, 1, 1), (2, 5, 6, 7), (0, 0)),
    ((7, 7, 7, 7), (7, 0, 0, 7), (2, 0)),
])
def test_compute_score_golden(attempt, reference, expected):
    assert compute_score(C(*attempt), C(*reference)) == expected


def test_score_of_self_is_win():
    for x in all_combinations(GameConfig(positions=4, colors=5)):
        assert compute_score(x, x) == (4, 0)


def test_scores_stay_in_domain_and_are_symmetric():
    cfg = GameConfig(positions=4, colors=3)
    combos = all_combinations(cfg)
    for a, b in itertools.product(combos, repeat=2):
        black, white = compute_score(a, b)
        assert black + white <= cfg.positions
        assert (black, white) != (cfg.positions - 1, 1)
        assert (black, white) in cfg.all_scores
        assert compute_score(b, a) == (black, white)


def test_score_depends_on_alignment():
    a, b = C(0, 1, 2, 3), C(0, 1, 2, 3)
    # Same permutation on both sides: unchanged
    perm = (2, 0, 3, 1)
    pa = C(*(a.get(i) for i in perm))
    pb = C(*(b.get(i) for i in perm))
    assert compute_score(pa, pb) == compute_score(a, b) == (4, 0)
    # Permuting only one side changes the score
    assert compute_score(a, C(1, 0, 2, 3)) == (2, 2)


def test_matches_score_agrees_with_compute_score():
    rng = random.Random(1234)
    combos = all_combinations(DEFAULT_CONFIG)
    for _ in range(500):
        a = rng.choice(combos)
        b = rng.choice(combos)
        for s in DEFAULT_CONFIG.all_scores:
            assert matches_score(a, b, s) == (compute_score(a, b) == s)


@pytest.mark.parametrize("positions,colors", [(4, 8), (4, 6), (3, 4)])
def test_score_table_agrees_with_compute_score(positions, colors):
    cfg = GameConfig(positions=positions, colors=colors)
    rng = random.Random(7)
    combos = all_combinations(cfg)
    guesses = [rng.choice(combos) for _ in range(40)]
    refs = [rng.choice(combos) for _ in range(60)]
    table = score_table(codes_of(guesses), codes_of(refs), cfg)
    assert table.shape == (40, 60)
    expected = np.array([[score_index(compute_score(g, r), cfg) for r in refs] for g in guesses])
    assert np.array_equal(table, expected)


def test_score_table_empty_references():
    table = score_table(codes_of([C(0, 0, 1, 1)]), codes_of([]), DEFAULT_CONFIG)
    assert table.shape == (1, 0)


# --- filtering ---

def test_filter_candidates_keeps_secret():
    secret = C(2, 5, 0, 7)
    history = [(g, compute_score(g, secret)) for g in (C(0, 0, 1, 1), C(2, 2, 3, 4))]
    cand = filter_candidates(all_combinations(), history)
    assert secret in cand
    assert C(0, 0, 1, 1) not in cand
    assert all(is_consistent(c, history) for c in cand)
    assert len(cand) < 4096


def test_filter_candidates_is_monotonic():
    secret = C(3, 1, 4, 1)
    h1 = [(C(0, 0, 1, 1), compute_score(C(0, 0, 1, 1), secret))]
    h2 = h1 + [(C(1, 2, 3, 4), compute_score(C(1, 2, 3, 4), secret))]
    rem1 = set(filter_candidates(all_combinations(), h1))
    rem2 = set(filter_candidates(all_combinations(), h2))
    assert rem2.issubset(rem1)


# --- input parsing ---

def test_parse_score():
    assert parse_score(" 1 ", "2\n", DEFAULT_CONFIG) == (1, 2)
    assert parse_score("4", "0", DEFAULT_CONFIG) == (4, 0)


@pytest.mark.parametrize("black,white", [("3", "1"), ("x", "0"), ("5", "0"), ("2", "3"), ("", "0")])
def test_parse_score_rejects(black, white):
    with pytest.raises(ValueError):
        parse_score(black, white, DEFAULT_CONFIG)


def test_parse_peg_count_range():
    assert parse_peg_count("0", DEFAULT_CONFIG) == 0
    with pytest.raises(ValueError):
        parse_peg_count("-1", DEFAULT_CONFIG)


def test_validate_score():
    assert validate_score((0, 4), DEFAULT_CONFIG) is True
    assert validate_score((3, 1), DEFAULT_CONFIG) is False
    assert validate_score([0, 0], DEFAULT_CONFIG) is False


def test_parse_combination():
    assert parse_combination("2,5,0,7", DEFAULT_CONFIG) == C(2, 5, 0, 7)
    assert parse_combination("2 5, 0 7", DEFAULT_CONFIG) == C(2, 5, 0, 7)
    for bad in ("8,0,0,0", "1,2,3", "a,b,c,d"):
        with pytest.raises(ValueError):
            parse_combination(bad, DEFAULT_CONFIG)
