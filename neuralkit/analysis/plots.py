# neuralkit/analysis/plots.py
"""Static charts of testing analysis results.

Every function writes one figure and returns its path. Drawing failures
are logged as warnings and yield ``None`` so a report never fails on a
chart.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .gain import KolmogorovSmirnovResults
from .roc import RocAnalysisResults
from .statistics import Histogram
from ..utils.logger import get_logger

logger = get_logger(__name__)

PLOT_DPI = 300


def _save(output_path: Union[str, Path]) -> Path:
    output_path = Path(output_path)
    plt.tight_layout()
    plt.savefig(output_path, dpi=PLOT_DPI, bbox_inches='tight')
    plt.close()
    return output_path


def plot_roc_curve(results: RocAnalysisResults, output_path: Union[str, Path]) -> Optional[Path]:
    """ROC curve with its area and optimal threshold."""
    try:
        curve = results.roc_curve
        plt.figure(figsize=(8, 6))
        plt.plot(curve[:, 1], curve[:, 0], linewidth=2,
                 label=f"ROC Curve (AUC = {results.area_under_curve:.4f})")
        plt.plot([0, 1], [0, 1], 'k--', linewidth=1, label='Random Classifier')

        plt.xlabel('False Positive Rate')
        plt.ylabel('True Positive Rate')
        plt.title(f'ROC Curve (optimal threshold = {results.optimal_threshold:.3f})')
        plt.legend()
        plt.grid(True, alpha=0.3)

        return _save(output_path)

    except Exception as e:
        logger.warning(f"Failed to create ROC curve plot: {e}")
        plt.close()
        return None


def plot_cumulative_gain(results: KolmogorovSmirnovResults, output_path: Union[str, Path]) -> Optional[Path]:
    """Positive and negative cumulative gain with the Kolmogorov-Smirnov gap."""
    try:
        positive = results.positive_cumulative_gain
        negative = results.negative_cumulative_gain
        fraction, gap = results.maximum_gain

        plt.figure(figsize=(8, 6))
        plt.plot(positive[:, 0], positive[:, 1], marker='o', linewidth=2, label='Positive Gain')
        plt.plot(negative[:, 0], negative[:, 1], marker='s', linewidth=2, label='Negative Gain')
        plt.plot([0, 1], [0, 1], 'k--', linewidth=1, label='Baseline')
        if gap > 0.0:
            plt.axvline(fraction, color='red', linestyle=':', label=f'KS = {gap:.4f}')

        plt.xlabel('Population Fraction')
        plt.ylabel('Cumulative Gain')
        plt.title('Cumulative Gain')
        plt.legend()
        plt.grid(True, alpha=0.3)

        return _save(output_path)

    except Exception as e:
        logger.warning(f"Failed to create cumulative gain plot: {e}")
        plt.close()
        return None


def plot_lift_chart(lift: np.ndarray, output_path: Union[str, Path]) -> Optional[Path]:
    try:
        plt.figure(figsize=(8, 6))
        plt.plot(lift[:, 0], lift[:, 1], marker='o', linewidth=2, label='Lift')
        plt.axhline(1.0, color='k', linestyle='--', linewidth=1, label='Baseline')

        plt.xlabel('Population Fraction')
        plt.ylabel('Lift')
        plt.title('Lift Chart')
        plt.legend()
        plt.grid(True, alpha=0.3)

        return _save(output_path)

    except Exception as e:
        logger.warning(f"Failed to create lift chart: {e}")
        plt.close()
        return None


def plot_calibration_plot(calibration: np.ndarray, output_path: Union[str, Path]) -> Optional[Path]:
    try:
        plt.figure(figsize=(8, 6))
        plt.plot(calibration[:, 0], calibration[:, 1], marker='o', linewidth=2, label='Model')
        plt.plot([0, 1], [0, 1], 'k--', linewidth=1, label='Perfectly Calibrated')

        plt.xlabel('Mean Predicted Probability')
        plt.ylabel('Fraction of Positives')
        plt.title('Calibration Plot')
        plt.legend()
        plt.grid(True, alpha=0.3)

        return _save(output_path)

    except Exception as e:
        logger.warning(f"Failed to create calibration plot: {e}")
        plt.close()
        return None


def plot_confusion_matrix(
    confusion: np.ndarray,
    output_path: Union[str, Path],
    labels: Optional[Sequence[str]] = None
) -> Optional[Path]:
    """Annotated heatmap of a binary or multiclass confusion matrix."""
    try:
        if labels is None:
            labels = ['Positive', 'Negative'] if confusion.shape == (2, 2) else \
                [str(i) for i in range(confusion.shape[0])]

        plt.figure(figsize=(8, 6))
        sns.heatmap(confusion, annot=True, fmt='d', cmap='Blues',
                    xticklabels=labels, yticklabels=labels)
        plt.title('Confusion Matrix')
        plt.ylabel('Target')
        plt.xlabel('Output')

        return _save(output_path)

    except Exception as e:
        logger.warning(f"Failed to create confusion matrix plot: {e}")
        plt.close()
        return None


def plot_histogram(
    histogram: Histogram,
    output_path: Union[str, Path],
    title: str = 'Histogram',
    xlabel: str = 'Value'
) -> Optional[Path]:
    """Bar chart of a histogram's frequencies over its bin centers."""
    try:
        widths = histogram.maximums - histogram.minimums

        plt.figure(figsize=(8, 6))
        plt.bar(histogram.centers, histogram.frequencies, width=widths * 0.9, alpha=0.8)

        plt.xlabel(xlabel)
        plt.ylabel('Frequency')
        plt.title(title)
        plt.grid(True, alpha=0.3)

        return _save(output_path)

    except Exception as e:
        logger.warning(f"Failed to create histogram plot: {e}")
        plt.close()
        return None
