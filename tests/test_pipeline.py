"""
End-to-end tests for the pipeline orchestrator and CLI.
"""

import pandas as pd
import pytest

from movie_pipeline.config import Config
from movie_pipeline.main import Pipeline, main
from movie_pipeline.schema import FINAL_COLUMNS
from movie_pipeline.utils.file_utils import load_json


def _config(tmp_path, input_path, **overrides):
    config_file = tmp_path / 'pipeline_config.yaml'
    config_file.write_text('# defaults only\n')
    config = Config(config_file)
    config.set('data.input_path', str(input_path))
    config.set('data.outputs_dir', str(tmp_path / 'outputs'))
    for key, value in overrides.items():
        config.set(key, value)
    return config


class TestScenario:
    """Ten rows: 2 missing gross, 1 duplicate, 1 budget outlier."""

    def test_clean_mode_exports_six_rows(self, tmp_path, scenario_csv):
        config = _config(tmp_path, scenario_csv, **{'outliers.zscore_threshold': 2.0})

        results = Pipeline(config=config).run('clean')

        assert results['rows'] == 6
        assert results['cleaning_report']['status'] == 'pass'

        lines = (tmp_path / 'outputs' / 'movies_clean.csv').read_text().splitlines()
        assert len(lines) == 7
        assert lines[0] == ','.join(FINAL_COLUMNS)

    def test_cleaning_log_is_saved(self, tmp_path, scenario_csv):
        config = _config(tmp_path, scenario_csv, **{'outliers.zscore_threshold': 2.0})

        Pipeline(config=config).run('clean')

        log = load_json(tmp_path / 'outputs' / 'cleaning_log.json')
        assert [step['rows_after'] for step in log['steps']] == [10, 10, 8, 7, 7, 6]

    def test_cli(self, tmp_path, scenario_csv, config_file):
        output_dir = tmp_path / 'cli_out'

        status = main([
            '--mode', 'clean',
            '--input', str(scenario_csv),
            '--output-dir', str(output_dir),
            '--config', str(config_file),
            '--zscore-threshold', '2.0',
            '--delimiter', ';',
        ])

        assert status == 0
        exported = pd.read_csv(output_dir / 'movies_clean.csv', sep=';')
        assert len(exported) == 6
        assert exported.columns.tolist() == FINAL_COLUMNS

    def test_cli_missing_input_exits_with_error(self, tmp_path, config_file):
        status = main([
            '--mode', 'clean',
            '--input', str(tmp_path / 'nope.csv'),
            '--output-dir', str(tmp_path / 'out'),
            '--config', str(config_file),
        ])

        assert status == 1
        assert not (tmp_path / 'out' / 'movies_clean.csv').exists()

    def test_cli_missing_config_exits_with_error(self, tmp_path, scenario_csv):
        status = main([
            '--mode', 'clean',
            '--input', str(scenario_csv),
            '--output-dir', str(tmp_path / 'out'),
            '--config', str(tmp_path / 'missing.yaml'),
        ])

        assert status == 1
        assert not (tmp_path / 'out').exists()


class TestVerificationSettings:
    """Outlier settings reach the cleaning check."""

    def test_two_sided_check_reports_low_tail(self, tmp_path, scenario_csv, clean_df):
        df = clean_df.copy()
        df.loc[0, 'gross'] = -100000

        one_sided = Pipeline(config=_config(
            tmp_path, scenario_csv, **{'outliers.zscore_threshold': 2.0}
        )).run_verification_cleaning(df)
        two_sided = Pipeline(config=_config(
            tmp_path, scenario_csv, **{'outliers.zscore_threshold': 2.0, 'outliers.two_sided': True}
        )).run_verification_cleaning(df)

        assert one_sided['status'] == 'pass'
        assert two_sided['status'] == 'pass_with_warnings'
        assert two_sided['checks']['zscores']['two_sided'] is True
        assert 'gross' in two_sided['warnings'][0]['columns']


class TestFullRun:
    """Full pipeline over the synthetic 360-movie table."""

    def test_full_run_writes_every_artifact(self, tmp_path, synthetic_csv):
        config = _config(tmp_path, synthetic_csv, **{'visualization.dpi': 50})

        results = Pipeline(config=config).run_full()

        outputs = tmp_path / 'outputs'
        for name in [
            'movies_clean.csv',
            'descriptive_stats.csv',
            'descriptive_stats.json',
            'regression_report.json',
            'regression_summary.txt',
            'cleaning_log.json',
            'cleaning_check.json',
        ]:
            assert (outputs / name).exists(), name

        assert len(results['files']['plots']) == 5
        assert results['cleaning_report']['status'] in ('pass', 'pass_with_warnings')
        assert results['regression_check']['checks']['vif']['status'] == 'pass'
        assert 0 < results['rows'] <= 300

        exported = pd.read_csv(outputs / 'movies_clean.csv')
        assert len(exported) == results['rows']
        assert not exported.duplicated().any()

    def test_plots_can_be_disabled(self, tmp_path, synthetic_csv):
        config = _config(tmp_path, synthetic_csv, **{'visualization.enabled': False})

        results = Pipeline(config=config).run('regress')

        assert results['files']['plots'] == []
        assert results['regression_report']['nobs'] == results['rows']

    def test_describe_mode(self, tmp_path, synthetic_csv):
        config = _config(tmp_path, synthetic_csv)

        Pipeline(config=config).run('describe')

        stats = pd.read_csv(tmp_path / 'outputs' / 'descriptive_stats.csv', index_col='column')
        assert list(stats.index) == FINAL_COLUMNS[1:]
        assert (stats['min'] <= stats['median']).all()
        assert (stats['median'] <= stats['max']).all()

    def test_unknown_mode(self, tmp_path, synthetic_csv):
        with pytest.raises(ValueError):
            Pipeline(config=_config(tmp_path, synthetic_csv)).run('train')
