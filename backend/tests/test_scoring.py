import pytest

from conftest import FixedRandom
from repguess.exceptions import InvalidInput
from repguess.models import Difficulty
from repguess.services.games.scoring import (
    compute_points,
    draw_target,
    guess_from_payload,
    parse_guess,
    payload_dict,
)


@pytest.mark.parametrize('attempts,timer,expected', [
    (1, 30, 15),
    (4, 17, 9),
    (3, 0, 7),
    (10, 4, 1),
    (25, 30, 1),
])
def test_compute_points(attempts, timer, expected):
    assert compute_points(attempts, timer) == expected


def test_draw_target_covers_both_ends():
    assert draw_target(Difficulty.EASY, FixedRandom(0.0)) == 5
    assert draw_target(Difficulty.EASY, FixedRandom(0.9999999)) == 20
    assert draw_target(Difficulty.HARD, FixedRandom(0.0)) == 20
    assert draw_target(Difficulty.HARD, FixedRandom(0.9999999)) == 50


def test_draw_target_with_real_random():
    import random
    rng = random.Random(1234)
    for difficulty in Difficulty:
        draws = {draw_target(difficulty, rng) for _ in range(500)}
        assert all(difficulty.contains(v) for v in draws)
        assert min(draws) == difficulty.minimum
        assert max(draws) == difficulty.maximum


def test_parse_guess_accepts_numbers():
    assert parse_guess('12') == 12
    assert isinstance(parse_guess('12'), int)
    assert parse_guess(' 7 ') == 7
    assert parse_guess('12.0') == 12
    assert parse_guess('12.5') == 12.5
    assert parse_guess('-3') == -3
    assert parse_guess(15) == 15


@pytest.mark.parametrize('raw', ['', '0', '-0', 'twelve', '1,5', 'inf', None, '1_5', '１２', '1e', '.'])
def test_parse_guess_rejects(raw):
    with pytest.raises(InvalidInput) as info:
        parse_guess(raw)
    assert info.value.raw == raw
    assert info.value.to_dict() == {'error': 'Invalid guess', 'message': 'Enter a number!'}


def test_parse_guess_zero_allowed_when_configured():
    assert parse_guess('0', reject_zero=False) == 0
    with pytest.raises(InvalidInput):
        parse_guess('', reject_zero=False)


def test_difficulty_parse():
    assert Difficulty.parse('Easy') is Difficulty.EASY
    assert Difficulty.parse(' hard ') is Difficulty.HARD
    assert Difficulty.parse(Difficulty.MEDIUM) is Difficulty.MEDIUM
    with pytest.raises(ValueError):
        Difficulty.parse('nightmare')
    with pytest.raises(ValueError):
        Difficulty.parse(None)


def test_guess_from_payload_shapes():
    assert guess_from_payload(None) is None
    assert guess_from_payload({'guess': '12'}) == '12'
    assert guess_from_payload({}) is None
    assert guess_from_payload('12') == '12'
    assert guess_from_payload(12) == 12
    assert guess_from_payload(['12']) == ''
    assert guess_from_payload(True) == ''
    with pytest.raises(InvalidInput):
        parse_guess(guess_from_payload(['12']))


def test_payload_dict_ignores_non_objects():
    assert payload_dict({'difficulty': 'easy'}) == {'difficulty': 'easy'}
    assert payload_dict(['easy']) == {}
    assert payload_dict('easy') == {}
    assert payload_dict(None) == {}
