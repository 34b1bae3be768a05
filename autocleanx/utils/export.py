# autocleanx/utils/export.py
import html
import json
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from autocleanx.types import AnalysisReport, Dataset, dataset_to_records
from autocleanx.utils.logging_config import get_logger, log_execution_time

logger = get_logger(__name__)

def report_stem(report: AnalysisReport) -> str:
    return Path(report.file_name).stem or "data"

def cleaned_frame(cleaned_data: Dataset) -> pd.DataFrame:
    """Cleaned rows as a DataFrame; header order follows the first row"""
    columns = list(cleaned_data[0].keys()) if cleaned_data else []
    return pd.DataFrame(dataset_to_records(cleaned_data), columns=columns)

@log_execution_time
def write_cleaned_csv(report: AnalysisReport, cleaned_data: Dataset, output_dir: Union[str, Path]) -> Path:
    """Write cleaned_<file_name>; missing cells become empty fields"""
    output_path = Path(output_dir) / f"cleaned_{Path(report.file_name).name}"
    cleaned_frame(cleaned_data).to_csv(output_path, index=False)
    logger.info(f"Cleaned data written to {output_path}")
    return output_path

@log_execution_time
def write_report_json(report: AnalysisReport, output_dir: Union[str, Path]) -> Path:
    output_path = Path(output_dir) / f"report_{report_stem(report)}.json"
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, indent=2)
    logger.info(f"JSON report written to {output_path}")
    return output_path

def render_report_html(report: AnalysisReport) -> str:
    """Render the report as a standalone HTML page"""
    columns = pd.DataFrame([
        {
            'Column': analysis.name,
            'Type': analysis.type.value,
            'Missing': analysis.missing_count,
            'Statistics': ', '.join(f"{key}: {value}" for key, value in analysis.stats.to_dict().items())
        }
        for analysis in report.column_analyses
    ])
    cleaning = pd.DataFrame(
        [{'Column': a.column, 'Action': a.action, 'Details': a.details} for a in report.cleaning_actions],
        columns=['Column', 'Action', 'Details']
    )
    features = pd.DataFrame(
        [
            {
                'Source column': info.source_column,
                'New columns': ', '.join(info.new_columns),
                'Description': info.description
            }
            for info in report.feature_engineering
        ],
        columns=['Source column', 'New columns', 'Description']
    )

    summary: Dict[str, str] = {
        'Rows': f"{report.initial_rows} → {report.cleaned_rows}",
        'Columns': f"{report.initial_cols} → {report.cleaned_cols}",
        'Processing time': f"{report.processing_time:.2f}s"
    }
    summary_items = ''.join(
        f"<li><strong>{html.escape(label)}:</strong> {html.escape(value)}</li>"
        for label, value in summary.items()
    )
    title = html.escape(report.file_name)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>AutoCleanX Report: {title}</title>
  <style>
    body {{ font-family: sans-serif; padding: 2rem; }}
    table {{ border-collapse: collapse; margin-bottom: 2rem; }}
    th, td {{ border: 1px solid #ccc; padding: 0.3rem 0.6rem; text-align: left; }}
  </style>
</head>
<body>
  <h1>AutoCleanX Report: {title}</h1>
  <ul>{summary_items}</ul>
  <h2>Column Analysis</h2>
  {columns.to_html(index=False)}
  <h2>Cleaning Actions</h2>
  {cleaning.to_html(index=False)}
  <h2>Feature Engineering</h2>
  {features.to_html(index=False)}
</body>
</html>
"""

@log_execution_time
def write_report_html(report: AnalysisReport, output_dir: Union[str, Path]) -> Path:
    output_path = Path(output_dir) / f"report_{report_stem(report)}.html"
    output_path.write_text(render_report_html(report), encoding='utf-8')
    logger.info(f"HTML report written to {output_path}")
    return output_path
