import pandas as pd
import pytest

from etfcompare.align import align_returns


def _rets(months, values, tz="UTC"):
    idx = pd.DatetimeIndex([f"2024-{m:02d}-01" for m in months], tz=tz, name="month")
    return pd.Series(values, index=idx, dtype=float)


class TestAlignReturns:
    def test_intersection_in_order(self):
        a = _rets([1, 2, 3], [0.01, 0.02, 0.03])
        b = _rets([2, 3, 4], [0.20, 0.30, 0.40])

        aligned = align_returns(a, b)

        assert list(aligned.index.month) == [2, 3]
        assert aligned["etf"].to_list() == [0.02, 0.03]
        assert aligned["index"].to_list() == [0.20, 0.30]

    def test_no_overlap_is_empty_not_error(self):
        aligned = align_returns(_rets([1, 2], [0.1, 0.2]), _rets([5, 6], [0.1, 0.2]))
        assert aligned.empty
        assert list(aligned.columns) == ["etf", "index"]

    def test_gaps_in_one_series_are_dropped(self):
        a = _rets([1, 2, 3, 4, 5], [1, 2, 3, 4, 5])
        b = _rets([1, 3, 5], [10, 30, 50])
        aligned = align_returns(a, b)
        assert list(aligned.index.month) == [1, 3, 5]
        assert aligned["index"].to_list() == [10, 30, 50]

    def test_unsorted_input_is_sorted_first(self):
        a = _rets([3, 1, 2], [0.03, 0.01, 0.02])
        b = _rets([1, 2, 3], [0.1, 0.2, 0.3])
        aligned = align_returns(a, b)
        assert aligned.index.is_monotonic_increasing
        assert aligned["etf"].to_list() == [0.01, 0.02, 0.03]

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            align_returns(_rets([1, 1], [0.1, 0.2]), _rets([1], [0.1]))

    def test_inputs_untouched(self):
        a = _rets([3, 1, 2], [0.03, 0.01, 0.02])
        before = a.copy()
        align_returns(a, _rets([1, 2, 3], [0.1, 0.2, 0.3]))
        pd.testing.assert_series_equal(a, before)
