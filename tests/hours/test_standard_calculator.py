from timecal.hours.calculator import StandardWorkedHoursCalculator, compute_worked_hours


def test_single_block_subtracts_pause():
    assert compute_worked_hours("08:00", "16:00", "", "", "00:30") == 7.5


def test_two_blocks_are_added():
    calc = StandardWorkedHoursCalculator()
    assert calc.worked_hours("08:00", "12:00", "13:00", "17:15", "") == 8.25


def test_inverted_range_never_goes_negative():
    assert compute_worked_hours("16:00", "08:00", "", "", "00:30") == 0.0


def test_pause_larger_than_work_is_clamped():
    assert compute_worked_hours("08:00", "08:15", "", "", "01:00") == 0.0


def test_incomplete_block_contributes_nothing():
    assert compute_worked_hours("08:00", "", "13:00", "15:00", "") == 2.0
    assert compute_worked_hours("", "", "", "", "00:30") == 0.0


def test_unreadable_values_are_ignored():
    assert compute_worked_hours("ab:cd", "16:00", "", "", "x") == 0.0
    assert compute_worked_hours("08:00", "12:00", "", "", "oops") == 4.0
