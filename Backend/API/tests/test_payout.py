import pytest

from services.constants import BINS
from services.errors import InvalidParameter
from services.payout import compute_payout, get_multiplier, get_payout_table, theoretical_rtp


def test_table_values():
    assert get_payout_table() == [16, 9, 2, 1.4, 1.4, 1.2, 1.1, 1.2, 1.4, 1.4, 2, 9, 16]
    assert len(get_payout_table()) == BINS


def test_table_is_symmetric():
    table = get_payout_table()
    assert table == table[::-1]


def test_center_minimum_edges_maximum():
    table = get_payout_table()
    center = len(table) // 2
    assert table[center] == min(table) == 1.1
    assert table[0] == table[-1] == max(table) == 16


def test_out_of_range_bin_falls_back_to_one():
    assert get_multiplier(-1) == 1
    assert get_multiplier(BINS) == 1
    assert get_multiplier(6) == 1.1


@pytest.mark.parametrize("bet, multiplier, expected", [
    (100, 1.1, 110),
    (5, 1.1, 6),      # 5.5 rounds up
    (3, 1.2, 4),      # 3.6
    (7, 1.4, 10),     # 9.8
    (1, 1.4, 1),      # 1.4
    (250, 16, 4000),
    (0, 9, 0),
])
def test_compute_payout_rounds_half_up(bet, multiplier, expected):
    assert compute_payout(bet, multiplier) == expected


def test_negative_bet_rejected():
    with pytest.raises(InvalidParameter):
        compute_payout(-1, 2)


def test_theoretical_rtp():
    assert theoretical_rtp() == pytest.approx(5431.2 / 4096)
    assert theoretical_rtp([1, 1, 1]) == pytest.approx(1.0)
