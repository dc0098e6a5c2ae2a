# tests/test_property_based.py
"""
Property-Based Tests

Hypothesis tests with max_examples=500, covering:
  - PRIO-6 weights, determinism, monotonicity and bounds
  - T.A.D.S. cardinality and symmetry
  - RDE quadrant totality
"""

import math
from decimal import Decimal
from itertools import permutations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from shinko.models.enumerations import RdeQuadrant
from shinko.models.opportunity import TADS_FLAGS, TadsCriteria
from shinko.scoring.prio_scorer import PRIO_WEIGHTS, compute_prio_score
from shinko.scoring.rde_classifier import classify_rde_quadrant
from shinko.scoring.tads_scorer import compute_tads_score

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

rating_st = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False, allow_infinity=False)
slider_st = st.floats(min_value=1.0, max_value=5.0, allow_nan=False, allow_infinity=False)
delta_st = st.floats(min_value=0.01, max_value=50.0, allow_nan=False, allow_infinity=False)
any_float_st = st.floats(allow_nan=True, allow_infinity=True)
flags_st = st.tuples(*[st.booleans() for _ in TADS_FLAGS])


# ---------------------------------------------------------------------------
# PRIO-6
# ---------------------------------------------------------------------------

def test_weights_sum_to_one():
    assert sum(PRIO_WEIGHTS.values(), Decimal("0")) == Decimal("1")


@settings(max_examples=500)
@given(v=rating_st, via=rating_st, r=rating_st)
def test_prio_is_deterministic(v, via, r):
    assert compute_prio_score(v, via, r) == compute_prio_score(v, via, r)


@settings(max_examples=500)
@given(v=rating_st, via=rating_st, r=rating_st, delta=delta_st)
def test_prio_strictly_increases_in_every_rating(v, via, r, delta):
    base = compute_prio_score(v, via, r)
    assert compute_prio_score(v + delta, via, r) > base
    assert compute_prio_score(v, via + delta, r) > base
    assert compute_prio_score(v, via, r + delta) > base


@settings(max_examples=500)
@given(v=slider_st, via=slider_st, r=slider_st)
def test_prio_bounded_on_slider_domain(v, via, r):
    score = compute_prio_score(v, via, r)
    assert 10.0 - 1e-9 <= score <= 50.0 + 1e-9


@settings(max_examples=500)
@given(v=rating_st, via=rating_st, r=rating_st)
def test_prio_is_finite_for_finite_inputs(v, via, r):
    assert math.isfinite(compute_prio_score(v, via, r))


# ---------------------------------------------------------------------------
# T.A.D.S.
# ---------------------------------------------------------------------------

@settings(max_examples=500)
@given(flags=flags_st)
def test_tads_is_twice_the_true_count(flags):
    criteria = TadsCriteria(**dict(zip(TADS_FLAGS, flags)))
    score = compute_tads_score(criteria)
    assert score == 2 * sum(flags)
    assert score % 2 == 0
    assert 0 <= score <= 10


@settings(max_examples=200)
@given(flags=flags_st)
def test_tads_ignores_which_flags_are_set(flags):
    scores = {
        compute_tads_score(TadsCriteria(**dict(zip(order, flags))))
        for order in permutations(TADS_FLAGS)
    }
    assert len(scores) == 1


# ---------------------------------------------------------------------------
# RDE
# ---------------------------------------------------------------------------

@settings(max_examples=500)
@given(v=any_float_st, via=any_float_st)
def test_quadrant_is_total(v, via):
    assert classify_rde_quadrant(v, via) in set(RdeQuadrant)


@settings(max_examples=500)
@given(v=rating_st, via=rating_st)
def test_quadrant_matches_axis_sides(v, via):
    assume(v != 3 and via != 3)
    quadrant = classify_rde_quadrant(v, via)
    fast = quadrant in (RdeQuadrant.SPRINT_ATTACK, RdeQuadrant.MVP_PARTNERSHIP)
    feasible = quadrant in (RdeQuadrant.SPRINT_ATTACK, RdeQuadrant.STRATEGIC_PLAN)
    assert fast == (v > 3)
    assert feasible == (via > 3)
