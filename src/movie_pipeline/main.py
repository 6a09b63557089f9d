"""
Main Pipeline Orchestrator

Runs load -> clean -> verify -> describe -> regress -> plot -> export.

Usage:
    # Run full pipeline
    movie-pipeline --input data/raw/movie_metadata.csv

    # Clean and export only, semicolon-delimited
    movie-pipeline --input data/raw/movie_metadata.csv --mode clean --delimiter ";"

    # Descriptive statistics / regression only
    movie-pipeline --mode describe
    movie-pipeline --mode regress --no-plots
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional

import pandas as pd

from .config import Config
from .errors import PipelineError
from .schema import FINAL_COLUMNS
from .utils.logging_utils import setup_logger, get_logger, set_level
from .utils.file_utils import save_csv, save_json, save_text

from .stage1.loader import MovieLoader
from .stage2.cleaner import DataCleaner
from .stage3.describer import describe_dataset
from .stage3.regression import RegressionAnalyzer, to_report
from .stage3.visualizer import Visualizer
from .stage4.exporter import export_dataset

from .verifiers.cleaning_check import CleaningChecker
from .verifiers.regression_check import RegressionChecker

logger = get_logger(__name__)

MODES = ['full', 'clean', 'describe', 'regress']


class Pipeline:
    """
    Main pipeline orchestrator.

    Example:
        >>> pipeline = Pipeline(config_file="config/pipeline_config.yaml")
        >>> results = pipeline.run_full()
        >>> results['rows']
        3653
    """

    def __init__(self, config_file: Optional[str] = None, config: Optional[Config] = None):
        """
        Initialize the pipeline.

        Args:
            config_file: Path to config file (optional)
            config: Ready Config instance; takes precedence over config_file
        """
        self.config = config if config is not None else Config(config_file)

        log_config = self.config.get_stage_config('logging')
        file_config = log_config.get('file', {})
        setup_logger(
            'movie_pipeline',
            log_file=file_config.get('path') if file_config.get('enabled') else None,
            level=log_config.get('level', 'INFO')
        )

        self.outputs_dir = Path(self.config.get('data.outputs_dir', 'data/outputs'))
        self.cleaning_log: List[Dict[str, Any]] = []

        logger.info("=" * 80)
        logger.info("Movie Pipeline Initialized")
        logger.info("=" * 80)

    def run_full(self) -> Dict[str, Any]:
        """
        Run every stage.

        Returns:
            Dict with 'rows', the verification reports and output file paths
        """
        logger.info("Running FULL PIPELINE")

        df = self.run_clean()
        cleaning_report = self.run_verification_cleaning(df)
        describe_file = self.run_describe(df)
        regression = self.run_regression(df)
        plot_files = self.run_visualization(df, regression['result'])
        export_file = self.run_export(df)

        logger.info("=" * 80)
        logger.info("PIPELINE COMPLETE")
        logger.info("=" * 80)

        return {
            'rows': len(df),
            'cleaning_report': cleaning_report,
            'regression_report': regression['report'],
            'regression_check': regression['check'],
            'files': {
                'dataset': str(export_file),
                'descriptive_stats': str(describe_file),
                'regression_report': str(regression['file']),
                'plots': [str(p) for p in plot_files]
            }
        }

    def run_clean(self) -> pd.DataFrame:
        """Run Stage 1 and Stage 2: load then clean."""
        logger.info("=" * 80)
        logger.info("STAGE 1: Loader")
        logger.info("=" * 80)

        filter_config = self.config.get_stage_config('filter')
        cleaning_config = self.config.get_stage_config('cleaning')
        outlier_config = self.config.get_stage_config('outliers')

        loader = MovieLoader(
            self.config.get('data.input_path'),
            config={
                'required_columns': [filter_config.get('column', 'country')]
                + list(cleaning_config.get('columns', FINAL_COLUMNS))
            }
        )
        raw_df = loader.load()

        logger.info("=" * 80)
        logger.info("STAGE 2: Cleaner")
        logger.info("=" * 80)

        cleaner = DataCleaner(config={
            'filter_column': filter_config.get('column', 'country'),
            'filter_value': filter_config.get('value', 'USA'),
            'columns': cleaning_config.get('columns', list(FINAL_COLUMNS)),
            'integer_columns': cleaning_config.get('integer_columns'),
            'outlier_columns': outlier_config.get('columns'),
            'zscore_threshold': float(outlier_config.get('zscore_threshold', 3.0)),
            'two_sided': bool(outlier_config.get('two_sided', False)),
        })
        df = cleaner.clean(raw_df)

        self.cleaning_log = cleaner.log
        save_json({'steps': self.cleaning_log}, self.outputs_dir / 'cleaning_log.json')

        logger.info(f"✓ Stage 2 complete: {len(df)} rows")

        return df

    def run_verification_cleaning(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Run the cleaning check."""
        check_config = dict(self.config.get_verification_config('cleaning'))
        check_config.setdefault('columns', self.config.get('cleaning.columns'))
        check_config.setdefault('integer_columns', self.config.get('cleaning.integer_columns'))
        check_config.setdefault('zscore_columns', self.config.get('outliers.columns'))
        check_config.setdefault('zscore_threshold', float(self.config.get('outliers.zscore_threshold', 3.0)))
        check_config.setdefault('two_sided', bool(self.config.get('outliers.two_sided', False)))

        report = CleaningChecker(config=check_config).verify(df)
        save_json(report, self.outputs_dir / 'cleaning_check.json')

        logger.info(f"✓ Cleaning check complete: Status = {report['status']}")

        return report

    def run_describe(self, df: pd.DataFrame) -> Path:
        """Run descriptive statistics over the numeric columns."""
        logger.info("=" * 80)
        logger.info("STAGE 3: Descriptive statistics")
        logger.info("=" * 80)

        stats = describe_dataset(df, self.config.get('outliers.columns'))

        csv_file = save_csv(stats.reset_index(), self.outputs_dir / 'descriptive_stats.csv')
        save_json(stats.to_dict(orient='index'), self.outputs_dir / 'descriptive_stats.json')

        return csv_file

    def run_regression(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Fit the OLS model, check it and save the report."""
        logger.info("=" * 80)
        logger.info("STAGE 3: Regression")
        logger.info("=" * 80)

        analyzer = RegressionAnalyzer(config=self.config.get_stage_config('regression'))
        result = analyzer.fit(df)
        report = to_report(result)

        check = RegressionChecker(
            config=self.config.get_verification_config('regression')
        ).verify(result)

        report_file = save_json({**report, 'check': check}, self.outputs_dir / 'regression_report.json')
        save_text(result['summary'], self.outputs_dir / 'regression_summary.txt')

        for predictor, value in result['vif'].items():
            logger.info(f"  VIF {predictor}: {value:.3f}")

        logger.info(f"✓ Regression complete: R² = {result['r_squared']:.4f}, check = {check['status']}")

        return {'result': result, 'report': report, 'check': check, 'file': report_file}

    def run_visualization(self, df: pd.DataFrame, result: Optional[Dict[str, Any]] = None) -> List[Path]:
        """Save the plots, unless visualization is disabled."""
        viz_config = self.config.get_stage_config('visualization')
        if not viz_config.get('enabled', True):
            logger.info("Visualization disabled - skipping plots")
            return []

        numeric_columns = self.config.get('outliers.columns')
        target = self.config.get('regression.target')
        predictors = self.config.get('regression.predictors')

        visualizer = Visualizer(
            output_dir=self.outputs_dir / 'plots',
            config={k: v for k, v in viz_config.items() if k != 'enabled'}
        )

        plot_files = [
            visualizer.plot_distributions(df, numeric_columns),
            visualizer.plot_boxplots(df, numeric_columns),
            visualizer.plot_correlation_heatmap(df, numeric_columns),
            visualizer.plot_target_vs_predictors(df, target, predictors),
        ]
        if result is not None:
            plot_files.append(visualizer.plot_residuals(result['fitted'], result['residuals']))

        return [p for p in plot_files if p]

    def run_export(self, df: pd.DataFrame) -> Path:
        """Run Stage 4: write the cleaned dataset."""
        logger.info("=" * 80)
        logger.info("STAGE 4: Exporter")
        logger.info("=" * 80)

        export_config = self.config.get_stage_config('export')
        output_file = export_dataset(
            df,
            self.outputs_dir / export_config.get('file_name', 'movies_clean.csv'),
            delimiter=export_config.get('delimiter', ','),
            columns=self.config.get('cleaning.columns', FINAL_COLUMNS)
        )

        logger.info(f"✓ Stage 4 complete: {output_file}")

        return output_file

    def run(self, mode: str = 'full') -> Dict[str, Any]:
        """Run one of MODES."""
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")

        if mode == 'full':
            return self.run_full()

        df = self.run_clean()
        results: Dict[str, Any] = {'rows': len(df)}

        if mode == 'clean':
            results['cleaning_report'] = self.run_verification_cleaning(df)
            results['files'] = {'dataset': str(self.run_export(df))}
        elif mode == 'describe':
            results['files'] = {'descriptive_stats': str(self.run_describe(df))}
        elif mode == 'regress':
            regression = self.run_regression(df)
            results['regression_report'] = regression['report']
            results['regression_check'] = regression['check']
            results['files'] = {
                'regression_report': str(regression['file']),
                'plots': [str(p) for p in self.run_visualization(df, regression['result'])]
            }
        return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Movie gross revenue analysis pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--mode',
        choices=MODES,
        default='full',
        help='Pipeline mode (default: full)'
    )
    parser.add_argument(
        '--input',
        help='Raw movie CSV (default: data.input_path from config)'
    )
    parser.add_argument(
        '--output-dir',
        help='Directory for outputs (default: data.outputs_dir from config)'
    )
    parser.add_argument(
        '--config',
        help='Path to config file (default: config/pipeline_config.yaml)'
    )
    parser.add_argument(
        '--delimiter',
        choices=[',', ';'],
        help='Delimiter of the exported CSV'
    )
    parser.add_argument(
        '--zscore-threshold',
        type=float,
        help='Z-score at or above which a row is trimmed'
    )
    parser.add_argument(
        '--no-plots',
        action='store_true',
        help='Skip plot generation'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point for the pipeline.

    Returns:
        Process exit status (0 on success, 1 on a pipeline failure)
    """
    args = build_parser().parse_args(argv)

    try:
        config = Config(args.config)
    except FileNotFoundError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    if args.input:
        config.set('data.input_path', args.input)
    if args.output_dir:
        config.set('data.outputs_dir', args.output_dir)
    if args.delimiter:
        config.set('export.delimiter', args.delimiter)
    if args.zscore_threshold is not None:
        config.set('outliers.zscore_threshold', args.zscore_threshold)
    if args.no_plots:
        config.set('visualization.enabled', False)

    pipeline = Pipeline(config=config)

    if args.verbose:
        set_level('DEBUG')

    try:
        results = pipeline.run(args.mode)
    except (PipelineError, FileNotFoundError) as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    print(f"\n✓ {results['rows']} movies after cleaning")
    for name, path in results.get('files', {}).items():
        if isinstance(path, list):
            print(f"✓ {name}: {len(path)} files")
        else:
            print(f"✓ {name}: {path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
