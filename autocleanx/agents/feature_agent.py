# autocleanx/agents/feature_agent.py
import logging
from datetime import date, datetime
from typing import List, Optional

from dateutil import parser as dateparser

from autocleanx.types import MISSING, Cell, ColumnAnalysis, ColumnType, Dataset, FeatureEngineeringInfo, Number, Text

logger = logging.getLogger(__name__)

# Any part missing from the text is taken from the default; two defaults that
# differ in every part expose it
_DEFAULT_DATES = (datetime(2000, 1, 1), datetime(2004, 12, 28))

def parse_date(cell: Cell) -> Optional[date]:
    """Calendar date written out in full (year, month and day) in a text cell, or None"""
    if not isinstance(cell, Text):
        return None

    text = cell.value.strip()
    if not any(ch.isdigit() for ch in text):
        return None

    try:
        first, second = (dateparser.parse(text, default=default) for default in _DEFAULT_DATES)
    except (ValueError, OverflowError):
        return None

    if first.date() != second.date():
        return None
    return first.date()

class FeatureEngineeringAgent:
    """Agent responsible for deriving new columns from date and text columns"""

    async def engineer_features(self, state: dict) -> dict:
        """Append derived columns to every cleaned row"""
        logger.info("Starting feature engineering")

        cleaned_data = state['cleaned_data']
        feature_engineering: List[FeatureEngineeringInfo] = []

        for analysis in state['column_analyses']:
            info = self.synthesize(cleaned_data, analysis)
            if info is not None:
                feature_engineering.append(info)

        created = sum(len(info.new_columns) for info in feature_engineering)
        state.update({
            'cleaned_data': cleaned_data,
            'feature_engineering': feature_engineering,
            'current_step': 'feature_engineering'
        })
        state['execution_log'].append(
            f"Feature engineering completed: {created} new columns from {len(feature_engineering)} source columns"
        )
        return state

    def synthesize(self, data: Dataset, analysis: ColumnAnalysis) -> Optional[FeatureEngineeringInfo]:
        """Derive columns for one analyzed column; only DATE and TEXT produce any"""
        if analysis.type == ColumnType.DATE:
            return self._create_date_features(data, analysis.name)
        if analysis.type == ColumnType.TEXT:
            return self._create_text_features(data, analysis.name)
        return None

    def _create_date_features(self, data: Dataset, column: str) -> FeatureEngineeringInfo:
        """Create year, month and day columns; unparseable rows are skipped"""
        new_columns = (f"{column}_year", f"{column}_month", f"{column}_day")
        year_col, month_col, day_col = new_columns
        skipped = 0

        for row in data:
            parsed = parse_date(row.get(column, MISSING))
            if parsed is None:
                skipped += 1
                continue
            row[year_col] = Number(parsed.year)
            row[month_col] = Number(parsed.month)
            row[day_col] = Number(parsed.day)

        if skipped:
            logger.debug(f"Column '{column}': {skipped} rows without a parseable date")

        return FeatureEngineeringInfo(
            source_column=column,
            new_columns=new_columns,
            description='Extracted date parts'
        )

    def _create_text_features(self, data: Dataset, column: str) -> FeatureEngineeringInfo:
        """Create length and word count columns"""
        new_columns = (f"{column}_length", f"{column}_word_count")
        length_col, word_count_col = new_columns

        for row in data:
            text = row.get(column, MISSING).as_text()
            row[length_col] = Number(len(text))
            row[word_count_col] = Number(len(text.split()))

        return FeatureEngineeringInfo(
            source_column=column,
            new_columns=new_columns,
            description='Calculated text metrics'
        )
