# autocleanx/api/main.py
import io
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from autocleanx import __version__
from autocleanx.config import get_config
from autocleanx.pipeline import process_data
from autocleanx.agents.report_agent import suggest_model
from autocleanx.types import AnalysisError, dataset_to_records
from autocleanx.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

config = get_config()

# Initialize FastAPI app
app = FastAPI(
    title="AutoCleanX API",
    description="Column type inference, cleaning and feature synthesis for CSV files",
    version=__version__
)

if config.api.ENABLE_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

class ModelSuggestionResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_type: Optional[str] = None
    reason: str
    model_name: Optional[str] = None

class AnalysisResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    status: str
    report: Dict[str, Any]
    cleaned_data: List[Dict[str, Any]]
    model_suggestion: Optional[ModelSuggestionResponse] = None

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}

@app.post("/analyze", response_model=AnalysisResponse)
async def analyze(file: UploadFile = File(...), target_column: Optional[str] = Form(None)):
    """Analyze an uploaded CSV file and return the report with the cleaned rows"""
    content = await file.read()

    max_bytes = config.api.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(status_code=413, detail=f"Upload exceeds {config.api.MAX_UPLOAD_SIZE_MB}MB")

    try:
        report, cleaned_data = await process_data(io.BytesIO(content), file_name=file.filename)
    except AnalysisError as e:
        logger.warning(f"Analysis of {file.filename} failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    suggestion = None
    if target_column:
        result = suggest_model(report, target_column)
        suggestion = ModelSuggestionResponse(
            model_type=result.model_type.value if result.model_type else None,
            reason=result.reason,
            model_name=result.model_name
        )

    return AnalysisResponse(
        status="completed",
        report=report.to_dict(),
        cleaned_data=dataset_to_records(cleaned_data),
        model_suggestion=suggestion
    )

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "AutoCleanX API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }

def run_server():
    """Start the API with uvicorn using the configured host and port"""
    setup_logging(log_level=config.logging_level, log_dir=config.paths.LOGS_DIR)
    uvicorn.run(
        app,
        host=config.api.DEFAULT_HOST,
        port=config.api.DEFAULT_PORT,
        log_level="info"
    )

if __name__ == "__main__":
    run_server()
