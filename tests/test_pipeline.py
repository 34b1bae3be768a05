# tests/test_pipeline.py
import io

import pytest

from autocleanx.pipeline import DataAnalysisPipeline, process_data, resolve_file_name
from autocleanx.types import (
    MISSING,
    AnalysisReport,
    ColumnType,
    CSVParsingError,
    EmptyDatasetError,
    Number,
    Text,
)

class TestProcessData:

    @pytest.mark.asyncio
    async def test_full_run(self, sample_csv_file, config):
        report, cleaned_data = await process_data(sample_csv_file, config=config)

        assert isinstance(report, AnalysisReport)
        assert report.file_name == "orders.csv"
        assert report.initial_rows == 14
        assert report.cleaned_rows == len(cleaned_data) == 14
        assert report.initial_cols == 5
        assert report.processing_time >= 0

        types = {analysis.name: analysis.type for analysis in report.column_analyses}
        assert types == {
            "id": ColumnType.NUMERIC,
            "score": ColumnType.NUMERIC,
            "color": ColumnType.CATEGORICAL,
            "joined": ColumnType.DATE,
            "comment": ColumnType.TEXT,
        }

    @pytest.mark.asyncio
    async def test_report_invariants(self, sample_csv_file, config):
        report, cleaned_data = await process_data(sample_csv_file, config=config)

        # One analysis per header, in header order
        assert [analysis.name for analysis in report.column_analyses] == ["id", "score", "color", "joined", "comment"]

        # Cleaning actions only for imputable types with gaps
        imputed = {action.column for action in report.cleaning_actions}
        expected = {
            analysis.name for analysis in report.column_analyses
            if analysis.missing_count > 0
            and analysis.type in (ColumnType.NUMERIC, ColumnType.CATEGORICAL, ColumnType.DATE)
        }
        assert imputed == expected == {"score", "color", "joined"}

        # Features only for date and text columns
        assert [info.source_column for info in report.feature_engineering] == ["joined", "comment"]

        new_columns = sum(len(info.new_columns) for info in report.feature_engineering)
        assert report.cleaned_cols == report.initial_cols + new_columns == 10
        assert len(cleaned_data[0]) == report.cleaned_cols

    @pytest.mark.asyncio
    async def test_cleaned_values(self, sample_csv_file, config):
        report, cleaned_data = await process_data(sample_csv_file, config=config)

        score = report.get_column("score")
        assert score.missing_count == 2
        assert score.stats.mean == pytest.approx(950 / 12)
        assert cleaned_data[2]["score"] == Number(score.stats.mean)
        assert cleaned_data[6]["score"] == Number(score.stats.mean)

        assert report.get_column("color").stats.mode == "red"
        assert cleaned_data[12]["color"] == Text("red")
        assert cleaned_data[13]["color"] == Text("red")

        # Imputed date still yields date parts
        assert cleaned_data[4]["joined"] == Text("2021-01-05")
        assert cleaned_data[4]["joined_month"] == Number(1)

        # Text columns are never imputed
        assert cleaned_data[5]["comment"] is MISSING
        assert cleaned_data[5]["comment_length"] == Number(0)

        details = {action.column: action.details for action in report.cleaning_actions}
        assert details["score"] == "Used mean (79.17)"
        assert details["color"] == "Used mode ('red')"

    @pytest.mark.asyncio
    async def test_file_like_source_with_name(self, sample_csv_text, config):
        source = io.BytesIO(sample_csv_text.encode("utf-8"))

        report, cleaned_data = await process_data(source, file_name="upload.csv", config=config)

        assert report.file_name == "upload.csv"
        assert len(cleaned_data) == 14

    @pytest.mark.asyncio
    async def test_headers_only_fails_before_profiling(self, config):
        with pytest.raises(EmptyDatasetError, match="CSV file is empty or contains only headers."):
            await process_data(io.StringIO("a,b,c\n"), config=config)

    @pytest.mark.asyncio
    async def test_parse_error_passes_through(self, config):
        with pytest.raises(CSVParsingError) as excinfo:
            await process_data(io.StringIO('a,b\n"1,2\n'), config=config)

        assert str(excinfo.value).startswith("CSV Parsing Error: ")

    @pytest.mark.asyncio
    async def test_mixed_column_mode_counts_only_strings(self, config):
        values = ["x", "1", "1", "1", "1", "1", "x", "y", "1", "1", "1", "1"]
        csv_text = "id,c\n" + "".join(f"{i},{value}\n" for i, value in enumerate(values))

        report, cleaned_data = await process_data(io.StringIO(csv_text), config=config)

        analysis = report.get_column("c")
        assert analysis.type == ColumnType.CATEGORICAL
        assert analysis.stats.mode == "x"
        assert analysis.stats.unique_values == 2
        assert cleaned_data[1]["c"] == Number(1)
        assert cleaned_data[0]["c"] == Text("x")

    @pytest.mark.asyncio
    async def test_short_row_is_not_imputed(self, config):
        with pytest.raises(CSVParsingError, match="Too few fields"):
            await process_data(io.StringIO("a,b,c\n1,2,3\n4\n"), config=config)

    @pytest.mark.asyncio
    async def test_infinite_value_is_not_used_as_mean(self, config):
        report, cleaned_data = await process_data(io.StringIO("v,w\ninf,1\n2,2\n,3\n"), config=config)

        assert report.get_column("v").type == ColumnType.TEXT
        assert report.cleaning_actions == ()
        assert cleaned_data[2]["v"] is MISSING

    @pytest.mark.asyncio
    async def test_runs_do_not_share_state(self, sample_csv_file, config):
        pipeline = DataAnalysisPipeline(config)

        first_report, first_data = await pipeline.run(sample_csv_file)
        second_report, second_data = await pipeline.run(sample_csv_file)

        assert first_data is not second_data
        assert first_report.cleaning_actions == second_report.cleaning_actions
        assert len(second_report.feature_engineering) == 2

class TestResolveFileName:

    def test_path(self, tmp_path):
        assert resolve_file_name(tmp_path / "sales.csv") == "sales.csv"
        assert resolve_file_name("dir/sales.csv") == "sales.csv"

    def test_named_file_object(self, sample_csv_file):
        with open(sample_csv_file, "rb") as f:
            assert resolve_file_name(f) == "orders.csv"

    def test_anonymous_buffer(self):
        assert resolve_file_name(io.BytesIO(b"")) == "data.csv"
