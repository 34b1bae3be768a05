# autocleanx/pipeline.py
import logging
import time
from pathlib import Path
from typing import Any, List, Optional, Tuple, TypedDict

from langgraph.graph import END, StateGraph

from autocleanx.agents.cleaning_agent import DataCleaningAgent
from autocleanx.agents.data_agent import DataIngestionAgent, DataSource
from autocleanx.agents.feature_agent import FeatureEngineeringAgent
from autocleanx.agents.profile_agent import ColumnProfilingAgent
from autocleanx.agents.report_agent import ReportAgent
from autocleanx.config import Config, get_config
from autocleanx.types import (
    AnalysisReport,
    CleaningAction,
    ColumnAnalysis,
    Dataset,
    FeatureEngineeringInfo,
)
from autocleanx.utils.logging_config import PipelineLogger, log_async_execution_time

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "data.csv"

class AnalysisState(TypedDict, total=False):
    """State handed from stage to stage during one run"""
    # Input
    source: Any
    file_name: str
    start_time: float

    # Data
    raw_data: Dataset
    headers: List[str]
    cleaned_data: Dataset

    # Logs
    column_analyses: List[ColumnAnalysis]
    cleaning_actions: List[CleaningAction]
    feature_engineering: List[FeatureEngineeringInfo]

    # Output
    report: AnalysisReport

    # Workflow
    current_step: str
    execution_log: List[str]

class DataAnalysisPipeline:
    def __init__(self, config: Optional[Config] = None):
        """Initialize the analysis pipeline"""
        self.config = config or get_config()
        self.graph = self._build_graph()
        self.compiled_graph = self.graph.compile()

        logger.debug("Data analysis pipeline initialized")

    def _build_graph(self) -> StateGraph:
        """Build the LangGraph workflow: one strictly forward chain of stages"""
        data_agent = DataIngestionAgent(self.config)
        profile_agent = ColumnProfilingAgent(self.config)
        cleaning_agent = DataCleaningAgent()
        feature_agent = FeatureEngineeringAgent()
        report_agent = ReportAgent()

        workflow = StateGraph(AnalysisState)

        workflow.add_node("ingest", data_agent.process)
        workflow.add_node("profile_columns", profile_agent.process)
        workflow.add_node("clean", cleaning_agent.clean_data)
        workflow.add_node("synthesize_features", feature_agent.engineer_features)
        workflow.add_node("assemble_report", report_agent.assemble_report)

        workflow.set_entry_point("ingest")
        workflow.add_edge("ingest", "profile_columns")
        workflow.add_edge("profile_columns", "clean")
        workflow.add_edge("clean", "synthesize_features")
        workflow.add_edge("synthesize_features", "assemble_report")
        workflow.add_edge("assemble_report", END)

        return workflow

    @log_async_execution_time
    async def run(self, source: DataSource, file_name: Optional[str] = None) -> Tuple[AnalysisReport, Dataset]:
        """Execute the complete analysis on one input file"""
        file_name = file_name or resolve_file_name(source)

        initial_state = AnalysisState(
            source=source,
            file_name=file_name,
            start_time=time.perf_counter(),
            current_step="initialization",
            execution_log=[]
        )

        with PipelineLogger(f"analysis of {file_name}", logger) as step_logger:
            final_state = await self.compiled_graph.ainvoke(initial_state)

            for entry in final_state["execution_log"]:
                step_logger.log_progress(entry)

            report = final_state["report"]
            step_logger.log_metric("processing_time", f"{report.processing_time:.3f}s")

        return report, final_state["cleaned_data"]

def resolve_file_name(source: DataSource) -> str:
    """Best-effort display name for a path or file-like source"""
    if isinstance(source, (str, Path)):
        return Path(source).name
    name = getattr(source, "name", None)
    if isinstance(name, str) and name:
        return Path(name).name
    return DEFAULT_FILE_NAME

async def process_data(source: DataSource,
                       file_name: Optional[str] = None,
                       config: Optional[Config] = None) -> Tuple[AnalysisReport, Dataset]:
    """
    Analyze, clean and enrich one delimited file

    Args:
        source: Path to the file or an open file-like object
        file_name: Name recorded in the report; derived from source when omitted
        config: Optional configuration; the global configuration by default

    Returns:
        The analysis report and the cleaned dataset

    Raises:
        CSVParsingError: the input could not be parsed
        EmptyDatasetError: the input has no data rows
    """
    pipeline = DataAnalysisPipeline(config)
    return await pipeline.run(source, file_name)
