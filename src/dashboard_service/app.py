"""HTTP service exposing the profiling engine and the chart extraction protocol."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from agent.viz.extraction import extract_chart_spec
from common.config.env import get_env_list
from ingestion.loader import DatasetLoadError, load_records
from profiling.engine import profile_dataset
from profiling.models import ChartSpec, append_chart

logger = logging.getLogger(__name__)

app = FastAPI(title="Dashboard Profiling Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_env_list(
        "DASHBOARD_CORS_ORIGINS", ["http://localhost:5173", "http://127.0.0.1:5173"]
    ),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ProfileResponse(BaseModel):
    """Profile of one uploaded dataset."""

    dataset: str
    columns: List[str]
    row_count: int
    classification: Dict[str, List[str]]
    kpis: List[Dict[str, Any]]
    charts: List[Dict[str, Any]]


class ExtractRequest(BaseModel):
    """Agent reply plus the dashboard's current chart list."""

    reply: str = Field(..., description="Raw text returned by the conversational agent")
    charts: List[ChartSpec] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    status: str
    success: bool
    display_text: str
    chart: Optional[Dict[str, Any]] = None
    charts: List[Dict[str, Any]]


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/datasets/profile", response_model=ProfileResponse)
async def profile_upload(file: UploadFile = File(...)) -> ProfileResponse:
    """Decode an uploaded CSV/XLSX file and return its KPIs and recommended charts."""
    content = await file.read()
    name = file.filename or "uploaded_file"
    try:
        dataset = load_records(content, name)
    except DatasetLoadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    profile = profile_dataset(dataset.records, dataset.columns).to_dict()
    return ProfileResponse(
        dataset=dataset.name,
        columns=dataset.columns,
        row_count=dataset.row_count,
        classification=profile["classification"],
        kpis=profile["kpis"],
        charts=profile["charts"],
    )


@app.post("/charts/extract", response_model=ExtractResponse)
def extract_chart(request: ExtractRequest) -> ExtractResponse:
    """Run the extraction protocol on one agent reply.

    The returned chart list is the request's list with the extracted chart
    appended on success, and the unchanged list otherwise.
    """
    result = extract_chart_spec(request.reply)
    charts = request.charts
    if result.chart is not None:
        charts = append_chart(charts, result.chart)

    payload = result.to_dict()
    return ExtractResponse(
        status=payload["status"],
        success=payload["success"],
        display_text=payload["display_text"],
        chart=payload["chart"],
        charts=[chart.to_dict() for chart in charts],
    )
