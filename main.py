import asyncio
import argparse
import sys
from pathlib import Path

from autocleanx.agents.report_agent import suggest_model
from autocleanx.config import get_config
from autocleanx.pipeline import process_data
from autocleanx.types import AnalysisError
from autocleanx.utils.export import write_cleaned_csv, write_report_html, write_report_json
from autocleanx.utils.logging_config import setup_logging

def main():
    """Main entry point for AutoCleanX"""
    parser = argparse.ArgumentParser(description="Analyze, clean and enrich a CSV file")
    parser.add_argument("--data-path", required=True, help="Path to the CSV file")
    parser.add_argument("--output-dir", help="Directory for the cleaned CSV and reports")
    parser.add_argument("--target-column", help="Column to predict, for a model suggestion")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--log-level", default=None, help="Logging level")
    parser.add_argument("--save-config", help="Write the effective configuration to this JSON file")

    args = parser.parse_args()

    # Load configuration
    config = get_config(args.config)
    if args.output_dir:
        config.paths.OUTPUT_DIR = Path(args.output_dir)

    issues = config.validate_config()
    if issues:
        for issue in issues:
            print(f"Configuration error: {issue}")
        sys.exit(1)

    config.create_directories()
    if args.save_config:
        config.save_config(args.save_config)

    # Setup logging
    setup_logging(log_level=args.log_level or config.logging_level, log_dir=config.paths.LOGS_DIR)

    # Validate data path exists
    if not Path(args.data_path).exists():
        print(f"Error: Data file not found at {args.data_path}")
        sys.exit(1)

    output_dir = config.paths.OUTPUT_DIR

    try:
        report, cleaned_data = asyncio.run(process_data(args.data_path, config=config))
    except AnalysisError as e:
        print(f"❌ Analysis failed: {e}")
        sys.exit(1)

    print(f"🎉 Analysis of {report.file_name} completed in {report.processing_time:.2f}s")
    print(f"Rows: {report.initial_rows} -> {report.cleaned_rows}")
    print(f"Columns: {report.initial_cols} -> {report.cleaned_cols}")

    for analysis in report.column_analyses:
        print(f"  {analysis.name}: {analysis.type.value} ({analysis.missing_count} missing)")

    for action in report.cleaning_actions:
        print(f"  Cleaned {action.column}: {action.details}")

    if args.target_column:
        suggestion = suggest_model(report, args.target_column)
        print(f"Model suggestion: {suggestion.reason}")
        if suggestion.model_type:
            print(f"  Suggested type: {suggestion.model_type.value} ({suggestion.model_name})")

    print(f"Cleaned data: {write_cleaned_csv(report, cleaned_data, output_dir)}")
    print(f"JSON report: {write_report_json(report, output_dir)}")
    print(f"HTML report: {write_report_html(report, output_dir)}")

if __name__ == "__main__":
    main()
