import pytest

from whatcard.domain.values import parse_amount


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (12, 12.0),
        ("12.5", 12.5),
        ("$1,200.50", 1200.5),
        (" 7 ", 7.0),
        ("twelve", 0.0),
        (None, 0.0),
        (True, 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        (-20, 0.0),
        ("-$5", 0.0),
    ],
)
def test_parse_amount(raw, expected) -> None:
    assert parse_amount(raw) == expected
