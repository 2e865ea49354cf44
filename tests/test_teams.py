import math
import pytest
from teamglicko import (
    InvalidRatingInput,
    Match,
    Player,
    RosterEntry,
    adjust_score,
    team_strength,
    update_rating,
    update_team_ratings,
)


@pytest.mark.parametrize('strength', [1.0, 1500.0, 4500.0])
def test_adjust_score_even(strength):
    assert adjust_score(strength, strength) == pytest.approx(0.5)


def test_adjust_score_limits():
    assert adjust_score(1e-9, 1.0) == pytest.approx(0.0, abs=1e-9)
    assert adjust_score(1.0, 1e-9) == pytest.approx(1.0, abs=1e-9)


def test_adjust_score_s_curve():
    assert adjust_score(3.0, 1.0) == pytest.approx((math.sin(0.25 * math.pi) + 1.0) / 2.0)
    assert adjust_score(3.0, 1.0) + adjust_score(1.0, 3.0) == pytest.approx(1.0)
    # the curve is steeper than the raw proportion around an even contest
    assert adjust_score(0.55, 0.45) > 0.55


def test_adjust_score_rejects_empty_strength():
    with pytest.raises(InvalidRatingInput):
        adjust_score(0.0, 0.0)


def test_team_strength():
    team = [Player(rating=1400.0), Player(rating=1600.0), Player()]
    assert team_strength(team) == pytest.approx(4500.0)


def test_update_team_ratings_splits_credit():
    opponents = [Player(rating=1400.0, rd=30.0), Player(rating=1550.0, rd=100.0)]
    matches = [Match(opponent.snapshot(), result) for opponent, result in zip(opponents, [1.0, 0.5])]
    player = Player(rating=1500.0, rd=200.0)
    reference = Player(rating=1500.0, rd=200.0)

    update_team_ratings([RosterEntry(player, matches)])
    for _ in range(2):
        update_rating(reference, matches, factor=0.5)

    assert player.mu == pytest.approx(reference.mu)
    assert player.phi == pytest.approx(reference.phi)
    assert player.sigma == pytest.approx(reference.sigma)


def test_update_team_ratings_order_independent():
    red = [Player(rating=1600.0, rd=80.0), Player(rating=1450.0, rd=120.0)]
    blue = [Player(rating=1500.0, rd=60.0), Player(rating=1520.0, rd=250.0)]
    score = adjust_score(team_strength(red), team_strength(blue))

    def entries(red_team, blue_team):
        red_snapshots = [player.snapshot() for player in red_team]
        blue_snapshots = [player.snapshot() for player in blue_team]
        out = [RosterEntry(player, [Match(snapshot, score) for snapshot in blue_snapshots]) for player in red_team]
        out += [RosterEntry(player, [Match(snapshot, 1.0 - score) for snapshot in red_snapshots]) for player in blue_team]
        return out

    forward_red = [Player(p.rating, p.rd) for p in red]
    forward_blue = [Player(p.rating, p.rd) for p in blue]
    update_team_ratings(entries(forward_red, forward_blue))

    backward_red = [Player(p.rating, p.rd) for p in red]
    backward_blue = [Player(p.rating, p.rd) for p in blue]
    update_team_ratings(list(reversed(entries(backward_red, backward_blue))))

    for forward, backward in zip(forward_red + forward_blue, backward_red + backward_blue):
        assert forward.rating == pytest.approx(backward.rating)
        assert forward.rd == pytest.approx(backward.rd)


def test_update_team_ratings_skips_idle_players():
    idle = Player(rating=1500.0, rd=200.0)
    update_team_ratings([RosterEntry(idle, [])])
    assert idle.rating == pytest.approx(1500.0)
    assert idle.rd == pytest.approx(200.0)
