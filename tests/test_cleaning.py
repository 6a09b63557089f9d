"""
Tests for Stage 2: filter, column selection and the cleaner.
"""

import numpy as np
import pandas as pd
import pytest

from movie_pipeline.errors import PreconditionError, SchemaError
from movie_pipeline.schema import FINAL_COLUMNS, NUMERIC_COLUMNS
from movie_pipeline.stage2 import (
    DataCleaner,
    coerce_integer,
    drop_duplicate_rows,
    drop_incomplete_rows,
    filter_rows,
    select_columns,
)


class TestFilterRows:
    """Tests for filter_rows."""

    def test_keeps_matching_rows_in_order(self):
        df = pd.DataFrame({
            'country': ['USA', 'UK', 'USA', 'France', 'USA'],
            'movie_title': ['a', 'b', 'c', 'd', 'e'],
        })

        result = filter_rows(df, 'country', 'USA')

        assert result['movie_title'].tolist() == ['a', 'c', 'e']
        assert (result['country'] == 'USA').all()

    def test_does_not_modify_input(self):
        df = pd.DataFrame({'country': ['USA', 'UK']})

        filter_rows(df, 'country', 'USA')

        assert len(df) == 2

    def test_missing_column_is_fatal(self):
        df = pd.DataFrame({'movie_title': ['a']})

        with pytest.raises(SchemaError) as exc_info:
            filter_rows(df, 'country', 'USA')

        assert exc_info.value.missing == ['country']

    def test_no_match_gives_empty_table(self):
        df = pd.DataFrame({'country': ['UK', 'France']})

        assert len(filter_rows(df, 'country', 'USA')) == 0


class TestSelectColumns:
    """Tests for select_columns."""

    def test_exact_columns_in_requested_order(self, scenario_df):
        columns = ['budget', 'movie_title', 'gross']

        result = select_columns(scenario_df, columns)

        assert list(result.columns) == columns
        assert len(result) == len(scenario_df)

    def test_final_columns(self, scenario_df):
        result = select_columns(scenario_df, FINAL_COLUMNS)

        assert list(result.columns) == FINAL_COLUMNS
        assert 'country' not in result.columns

    def test_missing_columns_are_all_reported(self, scenario_df):
        with pytest.raises(SchemaError) as exc_info:
            select_columns(scenario_df, ['gross', 'imdb_score', 'title_year'])

        assert exc_info.value.missing == ['imdb_score', 'title_year']


class TestDropIncompleteRows:
    """Tests for drop_incomplete_rows."""

    def test_removes_rows_with_any_missing_value(self):
        df = pd.DataFrame({
            'a': [1, np.nan, 3, 4],
            'b': ['x', 'y', None, 'z'],
        })

        result = drop_incomplete_rows(df)

        assert result['a'].tolist() == [1.0, 4.0]
        assert result.notna().all().all()

    def test_idempotent(self, scenario_df):
        once = drop_incomplete_rows(scenario_df)
        twice = drop_incomplete_rows(once)

        pd.testing.assert_frame_equal(once, twice)
        assert len(once) == 8


class TestDropDuplicateRows:
    """Tests for drop_duplicate_rows."""

    def test_removes_repeats_keeping_first_occurrence_order(self):
        df = pd.DataFrame({
            'title': ['a', 'b', 'a', 'c', 'b', 'a'],
            'gross': [1, 2, 1, 3, 2, 1],
        })

        result = drop_duplicate_rows(df)

        assert result['title'].tolist() == ['a', 'b', 'c']

    def test_row_count_is_n_minus_repeats(self):
        df = pd.DataFrame({
            'title': ['a', 'b', 'a', 'c', 'b', 'a', 'd'],
            'gross': [1, 2, 1, 3, 2, 1, 4],
        })
        repeats = 3

        assert len(drop_duplicate_rows(df)) == len(df) - repeats

    def test_partial_match_is_not_a_duplicate(self):
        df = pd.DataFrame({'title': ['a', 'a'], 'gross': [1, 2]})

        assert len(drop_duplicate_rows(df)) == 2

    def test_idempotent(self, scenario_df):
        once = drop_duplicate_rows(scenario_df)
        twice = drop_duplicate_rows(once)

        pd.testing.assert_frame_equal(once, twice)


class TestCoerceInteger:
    """Tests for coerce_integer."""

    def test_integral_floats_become_int64(self):
        df = pd.DataFrame({'gross': [1.0, 2.0, 3000000.0]})

        result = coerce_integer(df, 'gross')

        assert result['gross'].dtype == np.int64
        assert result['gross'].tolist() == [1, 2, 3000000]
        assert df['gross'].dtype == np.float64

    def test_fractional_value_is_a_precondition_violation(self):
        df = pd.DataFrame({'gross': [1.0, 2.5]})

        with pytest.raises(PreconditionError, match="fractional"):
            coerce_integer(df, 'gross')

    def test_missing_value_is_a_precondition_violation(self):
        df = pd.DataFrame({'gross': [1.0, np.nan]})

        with pytest.raises(PreconditionError):
            coerce_integer(df, 'gross')

    def test_non_numeric_value_is_a_precondition_violation(self):
        df = pd.DataFrame({'gross': ['100', 'n/a']})

        with pytest.raises(PreconditionError):
            coerce_integer(df, 'gross')

    def test_missing_column(self):
        with pytest.raises(SchemaError):
            coerce_integer(pd.DataFrame({'a': [1]}), 'gross')


class TestDataCleaner:
    """Tests for the full cleaning sequence."""

    def test_scenario_at_default_threshold_keeps_the_budget_outlier(self, scenario_df):
        # Seven rows remain before trimming; no single value can reach z = 3
        cleaner = DataCleaner()

        result = cleaner.clean(scenario_df)

        assert len(result) == 7
        assert 'Golf' in result['movie_title'].tolist()

    def test_scenario_at_threshold_two(self, scenario_df):
        cleaner = DataCleaner(config={'zscore_threshold': 2.0})

        result = cleaner.clean(scenario_df)

        assert len(result) == 6
        assert list(result.columns) == FINAL_COLUMNS
        assert result['movie_title'].tolist() == ['Alpha', 'Bravo', 'Charlie', 'Delta', 'Echo', 'Foxtrot']
        for column in NUMERIC_COLUMNS:
            assert result[column].dtype == np.int64

    def test_log_records_each_step(self, scenario_df):
        cleaner = DataCleaner(config={'zscore_threshold': 2.0})

        cleaner.clean(scenario_df)

        steps = [(entry['step'], entry['rows_before'], entry['rows_after']) for entry in cleaner.log]
        assert steps == [
            ('filter_rows', 10, 10),
            ('select_columns', 10, 10),
            ('drop_incomplete_rows', 10, 8),
            ('drop_duplicate_rows', 8, 7),
            ('coerce_integer', 7, 7),
            ('remove_outliers', 7, 6),
        ]

    def test_filters_other_countries(self, synthetic_movies_df):
        result = DataCleaner().clean(synthetic_movies_df)

        assert len(result) <= 300
        assert not result['movie_title'].isin([f'Movie {i}' for i in range(300, 360)]).any()

    def test_input_is_not_modified(self, scenario_df):
        before = scenario_df.copy()

        DataCleaner().clean(scenario_df)

        pd.testing.assert_frame_equal(scenario_df, before)

    def test_missing_filter_column_is_fatal(self, scenario_df):
        with pytest.raises(SchemaError):
            DataCleaner().clean(scenario_df.drop(columns=['country']))
