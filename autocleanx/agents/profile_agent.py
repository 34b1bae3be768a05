# autocleanx/agents/profile_agent.py
import logging
import math
from typing import Dict, List, Optional, Sequence

import numpy as np

from autocleanx.agents.feature_agent import parse_date
from autocleanx.config import Config, get_config
from autocleanx.types import MISSING, Cell, ColumnAnalysis, ColumnStats, ColumnType, Dataset, Number, Text

logger = logging.getLogger(__name__)

def to_number(cell: Cell) -> Optional[float]:
    """Finite numeric reading of a cell, or None"""
    if isinstance(cell, Number):
        return cell.value if math.isfinite(cell.value) else None
    if isinstance(cell, Text):
        text = cell.value.strip()
        # float() accepts digit separators; a plain numeric literal does not
        if not text or '_' in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
        return value if math.isfinite(value) else None
    return None

def string_pool(values: Sequence[Cell]) -> List[str]:
    """Non-blank string-typed values, in column order"""
    return [cell.value for cell in values if isinstance(cell, Text) and cell.value.strip()]

def infer_column_type(values: Sequence[Cell],
                      max_unique_ratio: float = 0.5,
                      min_values: int = 10) -> ColumnType:
    """Classify a column; checks run in order and the first match wins"""
    present = [cell for cell in values if not cell.is_missing]
    if not present:
        return ColumnType.UNKNOWN

    if all(to_number(cell) is not None for cell in present):
        return ColumnType.NUMERIC

    if all(isinstance(cell, Text) and parse_date(cell) is not None for cell in present):
        return ColumnType.DATE

    unique_ratio = len(set(present)) / len(present)
    if unique_ratio < max_unique_ratio and len(present) > min_values:
        return ColumnType.CATEGORICAL

    return ColumnType.TEXT

def count_values(pool: Sequence[str]) -> Dict[str, int]:
    """Occurrence counts keyed in first-insertion order"""
    counts: Dict[str, int] = {}
    for value in pool:
        counts[value] = counts.get(value, 0) + 1
    return counts

def find_mode(counts: Dict[str, int]) -> str:
    """Most frequent key; ties go to the key inserted first. Empty counts give ''."""
    mode = ''
    best = 0
    for value, count in counts.items():
        if count > best:
            mode, best = value, count
    return mode

def numeric_stats(values: Sequence[Cell]) -> ColumnStats:
    numbers = [number for number in (to_number(cell) for cell in values) if number is not None]

    if not numbers:
        return ColumnStats(mean=0.0)

    ordered = sorted(numbers)
    return ColumnStats(
        mean=float(np.mean(ordered)),
        median=float(np.median(ordered)),
        min=ordered[0],
        max=ordered[-1]
    )

class ColumnProfilingAgent:
    """Agent responsible for type inference and per-column statistics"""

    def __init__(self, config: Optional[Config] = None):
        config = config or get_config()
        self.max_unique_ratio = config.inference.CATEGORICAL_MAX_UNIQUE_RATIO
        self.min_values = config.inference.CATEGORICAL_MIN_VALUES

    def process(self, state: dict) -> dict:
        """Analyze every original header, in header order"""
        logger.info("Starting column profiling")

        raw_data = state['raw_data']
        column_analyses = [self.analyze_column(raw_data, header) for header in state['headers']]

        type_counts: Dict[str, int] = {}
        for analysis in column_analyses:
            type_counts[analysis.type.value] = type_counts.get(analysis.type.value, 0) + 1

        state.update({
            'column_analyses': column_analyses,
            'current_step': 'column_profiling'
        })
        state['execution_log'].append(f"Column profiling completed: {type_counts}")
        return state

    def analyze_column(self, data: Dataset, header: str) -> ColumnAnalysis:
        """Infer the type of one column and compute its statistics"""
        values = [row.get(header, MISSING) for row in data]
        column_type = infer_column_type(values, self.max_unique_ratio, self.min_values)
        missing_count = sum(1 for cell in values if cell.is_missing)

        if column_type == ColumnType.NUMERIC:
            stats = numeric_stats(values)
        elif column_type in (ColumnType.CATEGORICAL, ColumnType.DATE):
            pool = string_pool(values)
            counts = count_values(pool)
            stats = ColumnStats(mode=find_mode(counts), unique_values=len(counts))
        elif column_type == ColumnType.TEXT:
            stats = ColumnStats(unique_values=len(set(string_pool(values))))
        else:
            stats = ColumnStats()

        logger.debug(f"Column '{header}': {column_type.value}, {missing_count} missing")
        return ColumnAnalysis(name=header, type=column_type, missing_count=missing_count, stats=stats)
