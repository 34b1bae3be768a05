# autocleanx/agents/report_agent.py
import logging
import time
from typing import Optional

from autocleanx.types import AnalysisReport, ColumnType, ModelSuggestion, ModelType

logger = logging.getLogger(__name__)

class ReportAgent:
    """Agent responsible for packaging the run into an AnalysisReport"""

    def assemble_report(self, state: dict) -> dict:
        """Aggregate counters and the three logs; makes no decisions of its own"""
        logger.info("Assembling analysis report")

        raw_data = state['raw_data']
        cleaned_data = state['cleaned_data']

        report = AnalysisReport(
            file_name=state['file_name'],
            initial_rows=len(raw_data),
            cleaned_rows=len(cleaned_data),
            initial_cols=len(state['headers']),
            # Read from the actual shape of the cleaned data
            cleaned_cols=len(cleaned_data[0]) if cleaned_data else 0,
            processing_time=time.perf_counter() - state['start_time'],
            column_analyses=tuple(state['column_analyses']),
            cleaning_actions=tuple(state.get('cleaning_actions', [])),
            feature_engineering=tuple(state.get('feature_engineering', []))
        )

        state.update({
            'report': report,
            'current_step': 'reporting'
        })
        state['execution_log'].append(
            f"Report assembled: {report.cleaned_rows} rows, {report.initial_cols} -> {report.cleaned_cols} columns"
        )
        return state

def suggest_model(report: AnalysisReport, target_column: Optional[str]) -> ModelSuggestion:
    """Suggest a baseline model family for predicting target_column"""
    if not target_column:
        return ModelSuggestion(
            model_type=None,
            reason='Please select a target variable to get a model suggestion.'
        )

    column = report.get_column(target_column)
    if column is None:
        return ModelSuggestion(model_type=None, reason='Column not found.')

    if column.type == ColumnType.NUMERIC:
        return ModelSuggestion(
            model_type=ModelType.REGRESSION,
            reason=f"The target '{column.name}' is numeric, suggesting a regression task.",
            model_name="Linear Regression or Gradient Boosting"
        )

    if column.type == ColumnType.CATEGORICAL:
        unique_values = column.stats.unique_values
        if unique_values == 2:
            return ModelSuggestion(
                model_type=ModelType.CLASSIFICATION,
                reason=f"The target '{column.name}' is binary (2 unique values), suggesting a binary classification task.",
                model_name="Logistic Regression or a simple Neural Network"
            )
        return ModelSuggestion(
            model_type=ModelType.CLASSIFICATION,
            reason=f"The target '{column.name}' is categorical ({unique_values} unique values), suggesting a multi-class classification task.",
            model_name="Decision Tree or Random Forest"
        )

    return ModelSuggestion(
        model_type=None,
        reason=f"The column type '{column.type.value}' is not suitable for a simple regression or classification baseline."
    )
