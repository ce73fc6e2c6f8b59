"""
Tests for the checkout chart.
"""
import pytest

from dartsim.core import MalformedInputError, PreconditionError, ScoringPreference, Target
from dartsim.game import CHECKOUT_TABLE, CheckoutChart

NO_CHECKOUT = {159, 162, 163, 165, 166, 168, 169}


@pytest.fixture(scope="module")
def chart():
    return CheckoutChart()


def test_chart_covers_every_finishable_score(chart):
    """2-170 are charted except the seven scores that cannot be finished."""
    expected = set(range(2, 171)) - NO_CHECKOUT
    assert set(chart.scores()) == expected
    assert len(chart) == len(expected)


@pytest.mark.parametrize("score", sorted(set(range(2, 171)) - NO_CHECKOUT))
def test_every_checkout_finishes_on_a_double(chart, score):
    """Each entry sums to its score in 1-3 darts, the last a double."""
    out = chart.lookup(score)

    assert out
    assert 1 <= len(out) <= 3
    assert sum(t.score for t in out) == score
    assert out[-1].is_double


@pytest.mark.parametrize("score", sorted(NO_CHECKOUT) + [171, 180, 501])
def test_no_checkout(chart, score):
    assert chart.lookup(score) is None
    assert score not in chart


def test_known_checkouts(chart):
    assert chart.lookup(170) == tuple(Target.parse(t) for t in ("T20", "T20", "DB"))
    assert chart.lookup(40) == (Target.parse("D20"),)
    assert chart.lookup(125)[0] == Target.parse("SB")


def test_next_target_uses_chart(chart):
    """The first dart of the charted finish is the aim."""
    assert chart.next_target(170) == Target.parse("T20")
    assert chart.next_target(50, ScoringPreference.NINETEENS) == Target.parse("S18")
    assert chart.next_target(2) == Target.parse("D1")


def test_next_target_scoring_preference(chart):
    """Without a finish, aim at the preferred treble."""
    assert chart.next_target(501) == Target.parse("T20")
    assert chart.next_target(501, ScoringPreference.TWENTIES) == Target.parse("T20")
    assert chart.next_target(501, ScoringPreference.NINETEENS) == Target.parse("T19")
    assert chart.next_target(169, ScoringPreference.NINETEENS) == Target.parse("T19")
    assert chart.next_target(159) == Target.parse("T20")


@pytest.mark.parametrize("score", [1, 0, -5])
def test_next_target_below_two_fails(chart, score):
    """Asking for a target at an impossible score is a bug, not a miss."""
    with pytest.raises(PreconditionError):
        chart.next_target(score)


def test_chart_is_read_only(chart):
    with pytest.raises(TypeError):
        chart._outs[171] = (Target.parse("D1"),)


def test_table_is_plain_data():
    """The shipped table is auditable notation, one entry per score."""
    assert CHECKOUT_TABLE[2] == ("D1",)
    assert all(isinstance(label, str) for out in CHECKOUT_TABLE.values() for label in out)


def test_bad_table_rejected():
    """Entries that do not finish their score are refused."""
    with pytest.raises(MalformedInputError):
        CheckoutChart({40: ("D19",)})
    with pytest.raises(MalformedInputError):
        CheckoutChart({40: ("S20", "S20")})
    with pytest.raises(MalformedInputError):
        CheckoutChart({8: ("S1", "S1", "S2", "D1")})


def test_custom_table():
    chart = CheckoutChart({4: ("D2",)})
    assert chart.next_target(4) == Target.parse("D2")
    assert chart.next_target(40) == Target.parse("T20")
