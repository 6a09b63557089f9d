"""
Visualization Module

Creates plots for the cleaned movie table and the regression fit:
- Distributions of the numeric columns
- Box plots
- Correlation heatmap
- Gross vs each predictor, with a fitted line
- Residuals vs fitted values
"""

import math

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
from typing import Dict, Any, Optional, Sequence

from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

sns.set_style("whitegrid")
plt.rcParams['font.size'] = 10


class Visualizer:
    """
    Creates and saves plots as PNG files.

    Example:
        >>> viz = Visualizer(output_dir="data/outputs/plots")
        >>> viz.plot_correlation_heatmap(clean_df, NUMERIC_COLUMNS)
    """

    def __init__(
        self,
        output_dir: str = "data/outputs/plots",
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the Visualizer.

        Args:
            output_dir: Directory to save plots
            config: Configuration dictionary ('dpi', 'figsize', 'n_cols')
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.config = {
            'dpi': 150,
            'figsize': (12, 8),
            'n_cols': 3,
        }

        if config:
            self.config.update(config)

        logger.info(f"Initialized Visualizer (output: {self.output_dir})")

    def _grid(self, n_plots: int):
        n_cols = min(self.config['n_cols'], n_plots)
        n_rows = math.ceil(n_plots / n_cols)
        fig, axes = plt.subplots(
            n_rows, n_cols,
            figsize=(self.config['figsize'][0], 3.5 * n_rows),
            squeeze=False
        )
        flat = axes.flatten()
        # Hide unused panels in the last row
        for ax in flat[n_plots:]:
            ax.set_visible(False)
        return fig, flat[:n_plots]

    def _save(self, fig, file_name: str) -> Path:
        fig.tight_layout()
        file_path = self.output_dir / file_name
        fig.savefig(file_path, dpi=self.config['dpi'], bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Saved plot: {file_path.name}")
        return file_path

    def plot_distributions(self, df: pd.DataFrame, columns: Sequence[str]) -> Optional[Path]:
        """Histogram with KDE for each column."""
        if len(df) == 0:
            logger.warning("Empty dataset - skipping distribution plot")
            return None

        fig, axes = self._grid(len(columns))

        for ax, column in zip(axes, columns):
            sns.histplot(df[column], kde=len(df) > 1, ax=ax, color='steelblue')
            ax.set_title(column, fontsize=11, fontweight='bold')
            ax.set_xlabel('')

        return self._save(fig, "distributions.png")

    def plot_boxplots(self, df: pd.DataFrame, columns: Sequence[str]) -> Optional[Path]:
        """One box plot per column, each on its own scale."""
        if len(df) == 0:
            logger.warning("Empty dataset - skipping box plots")
            return None

        fig, axes = self._grid(len(columns))

        for ax, column in zip(axes, columns):
            sns.boxplot(y=df[column], ax=ax, color='lightcoral')
            ax.set_title(column, fontsize=11, fontweight='bold')
            ax.set_ylabel('')

        return self._save(fig, "boxplots.png")

    def plot_correlation_heatmap(self, df: pd.DataFrame, columns: Sequence[str]) -> Optional[Path]:
        """Pearson correlation matrix of the given columns."""
        if len(df) < 2:
            logger.warning("Fewer than 2 rows - skipping correlation heatmap")
            return None

        corr = df[list(columns)].astype(float).corr()

        fig, ax = plt.subplots(figsize=self.config['figsize'])
        sns.heatmap(
            corr, annot=True, fmt='.2f', cmap='coolwarm', vmin=-1, vmax=1,
            square=True, ax=ax
        )
        ax.set_title('Correlation Matrix', fontsize=14, fontweight='bold')

        return self._save(fig, "correlation_heatmap.png")

    def plot_target_vs_predictors(
        self,
        df: pd.DataFrame,
        target: str,
        predictors: Sequence[str]
    ) -> Optional[Path]:
        """Scatter of target against each predictor with a least-squares line."""
        if len(df) < 2:
            logger.warning("Fewer than 2 rows - skipping target vs predictor plots")
            return None

        fig, axes = self._grid(len(predictors))

        for ax, predictor in zip(axes, predictors):
            sns.regplot(
                x=df[predictor].astype(float), y=df[target].astype(float), ax=ax,
                scatter_kws={'alpha': 0.4, 's': 12},
                line_kws={'color': 'red'},
                ci=None
            )
            ax.set_title(f'{target} vs {predictor}', fontsize=11, fontweight='bold')

        return self._save(fig, f"{target}_vs_predictors.png")

    def plot_residuals(
        self,
        fitted: np.ndarray,
        residuals: np.ndarray,
        model_name: str = "ols"
    ) -> Optional[Path]:
        """Residuals against fitted values, plus the residual histogram."""
        fitted = np.asarray(fitted, dtype=float)
        residuals = np.asarray(residuals, dtype=float)

        if len(residuals) == 0:
            logger.warning("No residuals - skipping residual plot")
            return None

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=self.config['figsize'])

        ax1.scatter(fitted, residuals, alpha=0.5, s=15)
        ax1.axhline(y=0, color='r', linestyle='--', lw=2)
        ax1.set_xlabel('Fitted', fontsize=12)
        ax1.set_ylabel('Residual', fontsize=12)
        ax1.set_title('Residuals vs Fitted', fontsize=14, fontweight='bold')

        ax2.hist(residuals, bins=min(50, max(5, len(residuals) // 10)), edgecolor='black', alpha=0.7)
        ax2.axvline(x=0, color='r', linestyle='--', lw=2)
        ax2.set_xlabel('Residual', fontsize=12)
        ax2.set_title('Residual Distribution', fontsize=14, fontweight='bold')

        return self._save(fig, f"residuals_{model_name}.png")
