import pytest

from config import GameConfig


def test_defaults():
    config = GameConfig()
    assert config.segment_size == 10
    assert config.start == (50, 50)
    assert config.food_reward == 10
    assert not config.allow_reversal
    assert not config.avoid_occupied_cells


def test_grid_dimensions_round_down():
    config = GameConfig(width=405, height=297)
    assert config.columns == 40
    assert config.rows == 29


@pytest.mark.parametrize(
    "kwargs",
    [
        {"segment_size": 0},
        {"width": 5},
        {"height": 0},
        {"start": (55, 50)},
        {"start": (400, 50), "width": 400},
        {"start": (50, -10)},
    ],
)
def test_invalid_configs_are_rejected(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_seeded_rng_is_reproducible():
    config = GameConfig(seed=5)
    assert config.make_rng().random() == config.make_rng().random()
