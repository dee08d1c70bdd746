import pytest

from docschema.config import Config


@pytest.mark.parametrize(
    "requested, expected",
    [
        (None, 50),
        ("", 50),
        ("many", 50),
        (1, 1),
        (0, 1),
        (-10, 1),
        (25, 25),
        ("25", 25),
        (500, 500),
        (501, 500),
    ],
)
def test_clamp_sample_count(requested, expected):
    assert Config().clamp_sample_count(requested) == expected


def test_clamp_respects_custom_limits():
    cfg = Config(default_sample_count=10, max_sample_count=20)
    assert cfg.clamp_sample_count(None) == 10
    assert cfg.clamp_sample_count(99) == 20


def test_colors_disabled(cfg_like):
    assert cfg_like.colors() == ("", "", "", "")
    assert Config().colors()[3] == "\033[0m"
