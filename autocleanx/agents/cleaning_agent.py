# autocleanx/agents/cleaning_agent.py
import logging
from typing import List, Optional

from autocleanx.types import (
    MISSING,
    Cell,
    CleaningAction,
    ColumnAnalysis,
    ColumnType,
    Dataset,
    Number,
    clone_dataset,
)

logger = logging.getLogger(__name__)

FILL_ACTION = 'Filled missing values'

class DataCleaningAgent:
    """Agent responsible for imputing missing cells on a private copy of the data"""

    async def clean_data(self, state: dict) -> dict:
        """Clone the raw rows and impute every eligible column"""
        logger.info("Starting data cleaning")

        # The raw rows stay untouched; only the clone is mutated from here on
        cleaned_data = clone_dataset(state['raw_data'])
        cleaning_actions: List[CleaningAction] = []

        for analysis in state['column_analyses']:
            action = self.impute_column(cleaned_data, analysis)
            if action is not None:
                cleaning_actions.append(action)

        state.update({
            'cleaned_data': cleaned_data,
            'cleaning_actions': cleaning_actions,
            'current_step': 'data_cleaning'
        })
        state['execution_log'].append(
            f"Data cleaning completed: {len(cleaning_actions)} columns imputed"
        )
        return state

    def impute_column(self, data: Dataset, analysis: ColumnAnalysis) -> Optional[CleaningAction]:
        """Fill the column's missing cells with its precomputed statistic"""
        if analysis.missing_count == 0:
            return None

        if analysis.type == ColumnType.NUMERIC:
            mean = analysis.stats.mean or 0.0
            fill_value: Cell = Number(mean)
            details = f"Used mean ({mean:.2f})"
        elif analysis.type in (ColumnType.CATEGORICAL, ColumnType.DATE):
            mode = analysis.stats.mode or ''
            fill_value = Cell.from_raw(mode)
            details = f"Used mode ('{mode}')"
        else:
            return None

        filled = self._fill_missing(data, analysis.name, fill_value)
        logger.debug(f"Column '{analysis.name}': filled {filled} cells. {details}")

        return CleaningAction(column=analysis.name, action=FILL_ACTION, details=details)

    def _fill_missing(self, data: Dataset, column: str, fill_value: Cell) -> int:
        filled = 0
        for row in data:
            if row.get(column, MISSING).is_missing:
                row[column] = fill_value
                filled += 1
        return filled
