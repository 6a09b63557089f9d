"""
Shared fixtures for the movie pipeline tests.
"""

import numpy as np
import pandas as pd
import pytest

from movie_pipeline.schema import FINAL_COLUMNS

SOURCE_COLUMNS = ['color', 'country'] + FINAL_COLUMNS


def _row(title, gross, duration, budget, critics, director_likes, cast_likes, country='USA'):
    return {
        'color': 'Color',
        'country': country,
        'movie_title': title,
        'gross': gross,
        'duration': duration,
        'budget': budget,
        'num_critic_for_reviews': critics,
        'director_facebook_likes': director_likes,
        'cast_total_facebook_likes': cast_likes,
    }


@pytest.fixture
def scenario_df():
    """
    Ten USA movies: two with missing gross, one exact duplicate and one with an
    extreme budget. Six rows survive cleaning at a z-score threshold of 2.
    """
    rows = [
        _row('Alpha', 1000000, 100, 5000000, 100, 500, 2000),
        _row('Bravo', 1100000, 101, 5100000, 101, 510, 2010),
        _row('Charlie', 1200000, 102, 5200000, 102, 520, 2020),
        _row('Delta', 1300000, 103, 5300000, 103, 530, 2030),
        _row('Echo', 1400000, 104, 5400000, 104, 540, 2040),
        _row('Foxtrot', 1500000, 105, 5500000, 105, 550, 2050),
        _row('Golf', 1600000, 106, 900000000, 106, 560, 2060),
        _row('Hotel', np.nan, 107, 5700000, 107, 570, 2070),
        _row('India', np.nan, 108, 5800000, 108, 580, 2080),
        _row('Alpha', 1000000, 100, 5000000, 100, 500, 2000),
    ]
    return pd.DataFrame(rows, columns=SOURCE_COLUMNS)


@pytest.fixture
def scenario_csv(tmp_path, scenario_df):
    path = tmp_path / 'movies.csv'
    scenario_df.to_csv(path, index=False)
    return path


@pytest.fixture
def synthetic_movies_df():
    """300 USA and 60 UK movies with a linear gross/budget relationship, some gaps and repeats."""
    rng = np.random.default_rng(42)
    n = 360

    budget = rng.integers(1_000_000, 100_000_000, n)
    critics = rng.integers(10, 500, n)
    gross = 0.8 * budget + 100_000 * critics + rng.normal(0, 10_000_000, n)

    df = pd.DataFrame({
        'color': 'Color',
        'country': ['USA'] * 300 + ['UK'] * 60,
        'movie_title': [f'Movie {i}' for i in range(n)],
        'gross': np.maximum(gross, 1000).round().astype('int64'),
        'duration': rng.integers(80, 180, n),
        'budget': budget,
        'num_critic_for_reviews': critics,
        'director_facebook_likes': rng.integers(0, 20_000, n),
        'cast_total_facebook_likes': rng.integers(100, 50_000, n),
    }, columns=SOURCE_COLUMNS)

    df['gross'] = df['gross'].astype(float)
    df.loc[[3, 17, 250], 'gross'] = np.nan
    df.loc[[40], 'budget'] = np.nan

    # Exact repeats of two earlier rows
    return pd.concat([df, df.iloc[[5, 6]]], ignore_index=True)


@pytest.fixture
def synthetic_csv(tmp_path, synthetic_movies_df):
    path = tmp_path / 'movie_metadata.csv'
    synthetic_movies_df.to_csv(path, index=False)
    return path


@pytest.fixture
def clean_df():
    """A small table that already satisfies every post-cleaning invariant."""
    return pd.DataFrame({
        'movie_title': ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H'],
        'gross': [100, 120, 130, 150, 160, 180, 190, 210],
        'duration': [90, 95, 100, 105, 110, 115, 120, 125],
        'budget': [50, 55, 52, 60, 58, 65, 63, 70],
        'num_critic_for_reviews': [10, 12, 11, 15, 14, 18, 17, 20],
        'director_facebook_likes': [0, 5, 3, 8, 2, 9, 4, 7],
        'cast_total_facebook_likes': [100, 130, 90, 160, 120, 110, 150, 140],
    }, columns=FINAL_COLUMNS)


@pytest.fixture
def config_file(tmp_path):
    """An empty YAML config, so every setting comes from the defaults."""
    path = tmp_path / 'pipeline_config.yaml'
    path.write_text('# defaults only\n')
    return path
