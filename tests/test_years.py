"""Tests for multi-year loading."""

import json
import warnings
from pathlib import Path

import pandas as pd
import pytest
from pandera.errors import SchemaError

from conftest import COUNTS_2013, COUNTS_2014, make_accidents, write_accidents
from fars.aggregation import YearLoadResult, collect_years, load_year, read_years
from fars.aggregation.years import project_month_year
from fars.exceptions import YearCoercionWarning, YearLoadWarning
from fars.utils.logging import configure_logging


def _year_load_warnings(record: pytest.WarningsRecorder) -> list[warnings.WarningMessage]:
    return [w for w in record if issubclass(w.category, YearLoadWarning)]


class TestProjectMonthYear:
    """Tests for the month/year projection."""

    def test_columns_and_year(self, accidents_2014: pd.DataFrame) -> None:
        """Only month and the requested year are kept."""
        projected = project_month_year(accidents_2014, 2014)

        assert list(projected.columns) == ["month", "year"]
        assert (projected["year"] == 2014).all()
        assert projected["month"].tolist() == accidents_2014["MONTH"].tolist()

    def test_year_comes_from_request(self, accidents_2014: pd.DataFrame) -> None:
        """The year column is stamped, not read from the file."""
        projected = project_month_year(accidents_2014, 1999)
        assert set(projected["year"]) == {1999}

    def test_invalid_month_rejected(self) -> None:
        """Projected months are checked against 1..12."""
        df = pd.DataFrame({"MONTH": [1, 0]})
        with pytest.raises(SchemaError):
            project_month_year(df, 2014)


class TestLoadYear:
    """Tests for loading one year into a result."""

    def test_success(self, data_root: Path) -> None:
        """A present file gives a table and no error."""
        result = load_year(2014, data_root=data_root)

        assert isinstance(result, YearLoadResult)
        assert result.ok
        assert result.error is None
        assert result.filename == "accident_2014.csv.bz2"
        assert result.n_rows == sum(COUNTS_2014.values())

    def test_missing_file_is_captured(self, data_root: Path) -> None:
        """Errors are stored, not raised."""
        result = load_year(9999, data_root=data_root)

        assert not result.ok
        assert result.table is None
        assert isinstance(result.error, FileNotFoundError)
        assert result.n_rows == 0

    def test_invalid_year_is_captured(self, data_root: Path) -> None:
        """Non-numeric years fail without warnings from the worker."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = load_year("abc", data_root=data_root)

        assert not result.ok
        assert result.filename == "accident_NA.csv.bz2"
        assert isinstance(result.error, ValueError)

    def test_invalid_year_fails_even_if_na_file_exists(self, data_root: Path) -> None:
        """An accident_NA file is never loaded for an invalid year."""
        write_accidents(data_root / "accident_NA.csv.bz2", make_accidents(2014, {1: 2}))
        result = load_year("abc", data_root=data_root)
        assert not result.ok

    def test_requested_year_kept_as_given(self, data_root: Path) -> None:
        """The result records the year as the caller passed it."""
        result = load_year("2013", data_root=data_root)

        assert result.year == "2013"
        assert set(result.table["year"]) == {2013}


class TestReadYears:
    """Tests for read_years."""

    def test_two_years(self, data_root: Path) -> None:
        """One table per existing year, in input order."""
        tables = read_years([2014, 2013], data_root=data_root)

        assert isinstance(tables, list)
        assert len(tables) == 2
        assert all(isinstance(t, pd.DataFrame) for t in tables)
        assert len(tables[0]) == sum(COUNTS_2014.values())
        assert len(tables[1]) == sum(COUNTS_2013.values())
        assert set(tables[0]["year"]) == {2014}
        assert set(tables[1]["year"]) == {2013}

    def test_mixed_year_types(self, data_root: Path) -> None:
        """Ints and numeric strings can be mixed."""
        tables = read_years([2014, "2013"], data_root=data_root)
        assert [set(t["year"]) for t in tables] == [{2014}, {2013}]

    def test_missing_year_gives_none_and_one_warning(self, data_root: Path) -> None:
        """A missing year warns once and does not stop the others."""
        with pytest.warns(YearLoadWarning, match="invalid year: 9999") as record:
            tables = read_years([2014, 9999], data_root=data_root)

        assert len(tables) == 2
        assert tables[0] is not None
        assert tables[1] is None
        assert sum(t is None for t in tables) == 1
        assert len(_year_load_warnings(record)) == 1

    def test_every_failed_year_warns(self, data_root: Path) -> None:
        """Each failing year produces its own warning, in input order."""
        with pytest.warns((YearLoadWarning, YearCoercionWarning)) as record:
            tables = read_years([9998, 2013, "abc"], data_root=data_root)

        assert [t is None for t in tables] == [True, False, True]
        messages = [str(w.message) for w in _year_load_warnings(record)]
        assert messages == ["invalid year: 9998", "invalid year: abc"]

    def test_non_numeric_year_warns_coercion_then_load(self, data_root: Path) -> None:
        """A non-numeric year reports the coercion failure before the load failure."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            tables = read_years(["abc", 2014], data_root=data_root)

        assert tables[0] is None
        assert tables[1] is not None
        relevant = [
            w for w in caught if issubclass(w.category, (YearCoercionWarning, YearLoadWarning))
        ]
        assert [w.category for w in relevant] == [YearCoercionWarning, YearLoadWarning]
        assert "'abc'" in str(relevant[0].message)
        assert str(relevant[1].message) == "invalid year: abc"

    def test_log_events_carry_year(
        self, data_root: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Events logged while loading a year are tagged with that year."""
        configure_logging(level="DEBUG", json_output=True)
        read_years([2014], data_root=data_root)

        events = [
            json.loads(line)
            for line in capsys.readouterr().err.splitlines()
            if line.startswith("{")
        ]
        reading = [e for e in events if e["event"] == "Reading accidents"]
        assert reading
        assert reading[0]["year"] == 2014

    def test_unreadable_file_is_isolated(self, data_root: Path) -> None:
        """Files failing validation are treated like missing ones."""
        bad = make_accidents(2012, {1: 2}).drop(columns=["MONTH"])
        write_accidents(data_root / "accident_2012.csv.bz2", bad)

        with pytest.warns(YearLoadWarning, match="invalid year: 2012"):
            tables = read_years([2012, 2014], data_root=data_root)

        assert tables[0] is None
        assert tables[1] is not None

    def test_no_warning_when_all_load(self, data_root: Path) -> None:
        """Successful batches are silent."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", YearLoadWarning)
            read_years([2013, 2014], data_root=data_root)

    def test_empty_input(self, data_root: Path) -> None:
        """No years, no tables."""
        assert read_years([], data_root=data_root) == []

    def test_custom_template(self, tmp_path: Path) -> None:
        """Files named by another pattern are found through the template."""
        write_accidents(tmp_path / "fars_2010.csv.gz", make_accidents(2010, {3: 4}))

        tables = read_years([2010], data_root=tmp_path, template="fars_{year}.csv.gz")
        assert len(tables[0]) == 4


class TestCollectYearsParallel:
    """Tests for threaded loading."""

    def test_order_preserved(self, data_root: Path) -> None:
        """Results line up with the input regardless of completion order."""
        years = [2014, 9999, 2013, "2014", 8888]
        results = collect_years(years, data_root=data_root, max_workers=4)

        assert [r.year for r in results] == years
        assert [r.ok for r in results] == [True, False, True, True, False]

    def test_parallel_matches_sequential(self, data_root: Path) -> None:
        """Threaded and sequential loading give identical tables."""
        years = [2013, 2014, 9999]
        sequential = collect_years(years, data_root=data_root)
        parallel = collect_years(years, data_root=data_root, max_workers=3)

        for seq, par in zip(sequential, parallel, strict=True):
            assert seq.ok == par.ok
            if seq.ok:
                pd.testing.assert_frame_equal(seq.table, par.table)

    def test_parallel_read_years_warns_once_per_failure(self, data_root: Path) -> None:
        """Warnings are still emitted exactly once per failed year."""
        with pytest.warns(YearLoadWarning) as record:
            tables = read_years([2014, 9999, 2013], data_root=data_root, max_workers=3)

        assert [t is None for t in tables] == [False, True, False]
        assert len(_year_load_warnings(record)) == 1
