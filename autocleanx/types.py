# autocleanx/types.py
import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np


class AnalysisError(Exception):
    """Base class for failures surfaced to the caller of the analysis pipeline"""


class CSVParsingError(AnalysisError):
    """Raised when the input could not be tokenized into rows"""


class EmptyDatasetError(AnalysisError):
    """Raised when parsing produced zero data rows"""

    def __init__(self, message: str = "CSV file is empty or contains only headers."):
        super().__init__(message)


class ColumnType(str, Enum):
    """Semantic type inferred for a column"""
    NUMERIC = 'Numeric'
    CATEGORICAL = 'Categorical'
    DATE = 'Date'
    TEXT = 'Text'
    UNKNOWN = 'Unknown'


class ModelType(str, Enum):
    REGRESSION = 'Regression'
    CLASSIFICATION = 'Classification'


# --- Cells ---------------------------------------------------------------

class Cell:
    """A single dataset value: Number, Text, Flag or MISSING"""

    is_missing = False

    @staticmethod
    def from_raw(value: Any) -> 'Cell':
        """Wrap a parser-produced scalar into its cell variant"""
        if isinstance(value, Cell):
            return value
        if value is None:
            return MISSING
        if isinstance(value, (bool, np.bool_)):
            return Flag(bool(value))
        if isinstance(value, (int, np.integer)):
            return Number(int(value))
        if isinstance(value, (float, np.floating)):
            return MISSING if math.isnan(value) else Number(float(value))
        text = str(value)
        return MISSING if text == '' else Text(text)

    def to_python(self) -> Any:
        raise NotImplementedError

    def as_text(self) -> str:
        raise NotImplementedError


class _Missing(Cell):
    is_missing = True

    def __repr__(self) -> str:
        return 'MISSING'

    def __reduce__(self):
        return (_missing, ())

    def to_python(self) -> Any:
        return None

    def as_text(self) -> str:
        return ''


MISSING = _Missing()


def _missing() -> _Missing:
    return MISSING


@dataclass(frozen=True)
class Number(Cell):
    value: Union[int, float]

    def to_python(self) -> Union[int, float]:
        return self.value

    def as_text(self) -> str:
        # Integral floats render without a trailing ".0"
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return str(self.value)


@dataclass(frozen=True)
class Text(Cell):
    value: str

    def to_python(self) -> str:
        return self.value

    def as_text(self) -> str:
        return self.value


@dataclass(frozen=True)
class Flag(Cell):
    value: bool

    def to_python(self) -> bool:
        return self.value

    def as_text(self) -> str:
        return 'true' if self.value else 'false'


Row = Dict[str, Cell]
Dataset = List[Row]


def clone_dataset(data: Dataset) -> Dataset:
    """Copy every row; cells are immutable so a per-row copy is a full clone"""
    return [dict(row) for row in data]


def dataset_to_records(data: Dataset) -> List[Dict[str, Any]]:
    """Convert rows of cells back to plain Python values"""
    return [{key: cell.to_python() for key, cell in row.items()} for row in data]


# --- Report records -------------------------------------------------------

@dataclass(frozen=True)
class ColumnStats:
    """Statistics bag; populated fields depend on the column type"""
    mean: Optional[float] = None
    median: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    mode: Optional[str] = None
    unique_values: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class ColumnAnalysis:
    name: str
    type: ColumnType
    missing_count: int
    stats: ColumnStats = field(default_factory=ColumnStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.type.value,
            'missing_count': self.missing_count,
            'stats': self.stats.to_dict()
        }


@dataclass(frozen=True)
class CleaningAction:
    column: str
    action: str
    details: str


@dataclass(frozen=True)
class FeatureEngineeringInfo:
    source_column: str
    new_columns: Tuple[str, ...]
    description: str


@dataclass(frozen=True)
class AnalysisReport:
    """Terminal aggregate of one analysis run"""
    file_name: str
    initial_rows: int
    cleaned_rows: int
    initial_cols: int
    cleaned_cols: int
    processing_time: float
    column_analyses: Tuple[ColumnAnalysis, ...]
    cleaning_actions: Tuple[CleaningAction, ...]
    feature_engineering: Tuple[FeatureEngineeringInfo, ...]

    def get_column(self, name: str) -> Optional[ColumnAnalysis]:
        for analysis in self.column_analyses:
            if analysis.name == name:
                return analysis
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file_name': self.file_name,
            'initial_rows': self.initial_rows,
            'cleaned_rows': self.cleaned_rows,
            'initial_cols': self.initial_cols,
            'cleaned_cols': self.cleaned_cols,
            'processing_time': self.processing_time,
            'column_analyses': [analysis.to_dict() for analysis in self.column_analyses],
            'cleaning_actions': [asdict(action) for action in self.cleaning_actions],
            'feature_engineering': [
                {
                    'source_column': info.source_column,
                    'new_columns': list(info.new_columns),
                    'description': info.description
                }
                for info in self.feature_engineering
            ]
        }


@dataclass(frozen=True)
class ModelSuggestion:
    model_type: Optional[ModelType]
    reason: str
    model_name: Optional[str] = None
