import numpy as np
import pytest

from streaming_cat.core.covenant import StreamValidationError, required_payout
from streaming_cat.driver.schedule import VestingSchedule, project_schedule


class TestProjectSchedule:

    def test_endpoints(self):
        schedule = project_schedule(1000, 0, 1000)
        assert schedule.times[0] == 0
        assert schedule.times[-1] == 1000
        assert schedule.claimable[0] == 0
        assert schedule.claimable[-1] == 1000

    def test_default_points(self):
        schedule = project_schedule(1000, 0, 1000)
        assert schedule.times.tolist() == list(range(0, 1001, 100))

    def test_dtypes(self):
        schedule = project_schedule(1000, 0, 1000, points=5)
        assert schedule.times.dtype == np.int64
        assert schedule.claimable.dtype == np.uint64

    def test_matches_covenant_arithmetic(self):
        schedule = project_schedule(997, 250, 1000, points=7)
        for t, amount in schedule.rows():
            assert amount == required_payout(997, 250, 1000, t)

    def test_monotonic(self):
        assert project_schedule(12345, 17, 9999, points=50).is_monotonic()

    def test_short_window_deduplicates(self):
        schedule = project_schedule(10, 0, 3, points=11)
        assert schedule.times.tolist() == [0, 1, 2, 3]

    def test_increments_sum_to_total(self):
        schedule = project_schedule(1000, 0, 1000, points=4)
        increments = schedule.increments()
        assert increments[0] == 0
        assert int(increments.sum()) == 1000
        assert increments.dtype == np.uint64

    def test_large_amount_exact(self):
        amount = 2 ** 64 - 1
        schedule = project_schedule(amount, 0, 3, points=4)
        assert int(schedule.claimable[-1]) == amount

    def test_too_few_points(self):
        with pytest.raises(ValueError, match="At least 2"):
            project_schedule(1000, 0, 1000, points=1)

    def test_empty_window(self):
        with pytest.raises(StreamValidationError):
            project_schedule(1000, 1000, 1000)

    def test_end_time_too_large(self):
        with pytest.raises(StreamValidationError, match="2\\*\\*53"):
            project_schedule(1000, 0, 2 ** 53 + 1)

    @pytest.mark.parametrize("amount", [-5, 2 ** 64, True])
    def test_amount_out_of_range(self, amount):
        with pytest.raises(StreamValidationError, match="my_amount"):
            project_schedule(amount, 0, 1000)


class TestVestingSchedule:

    def test_rows_are_python_ints(self):
        schedule = VestingSchedule(
            times=np.array([0, 5], dtype=np.int64),
            claimable=np.array([0, 9], dtype=np.uint64),
        )
        rows = schedule.rows()
        assert rows == [(0, 0), (5, 9)]
        assert all(type(v) is int for row in rows for v in row)

    def test_non_monotonic_detected(self):
        schedule = VestingSchedule(
            times=np.array([0, 1, 2], dtype=np.int64),
            claimable=np.array([0, 5, 4], dtype=np.uint64),
        )
        assert not schedule.is_monotonic()
