"""
Overflow Watch - 32-bit primary key overflow projections
"""

from .growth_model import GrowthModel
from .series_generator import Sample, SeriesGenerator
from .overflow_estimator import INT32_MAX, WARNING_THRESHOLD, OverflowEstimator, OverflowForecast
from .severity import SeverityTier, classify
from .projector import OverflowProjector, OverflowReport
from .prediction_source import Prediction, PredictionClient, SourceUnavailable

__all__ = [
    'GrowthModel',
    'Sample',
    'SeriesGenerator',
    'INT32_MAX',
    'WARNING_THRESHOLD',
    'OverflowEstimator',
    'OverflowForecast',
    'SeverityTier',
    'classify',
    'OverflowProjector',
    'OverflowReport',
    'Prediction',
    'PredictionClient',
    'SourceUnavailable',
]

__version__ = '0.1.0'
