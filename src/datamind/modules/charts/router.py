"""
DataMind Charts - Router.

API endpoints for dashboard chart operations.
"""

from fastapi import APIRouter, Depends

from datamind.deps import get_session, require_chart_builder
from datamind.modules.charts.schemas import (
    ChartBuildRequest,
    ChartConfig,
    ChartSpecResponse,
    ChartTypeUpdateRequest,
)
from datamind.modules.sessions.session import Session

router = APIRouter(prefix="/sessions/{session_id}/charts", tags=["charts"])


@router.post("", response_model=ChartConfig, status_code=201, dependencies=[require_chart_builder])
async def add_chart(request: ChartBuildRequest, session: Session = Depends(get_session)):
    """
    Add a chart from the manual chart builder.

    Missing axis keys default to the first and second dataset columns.
    """
    return session.add_chart(
        title=request.title,
        chart_type=request.type,
        x_axis_key=request.x_axis_key,
        y_axis_key=request.y_axis_key,
        description=request.description,
    )


@router.patch("/{index}", response_model=ChartConfig)
async def update_chart_type(
    index: int,
    request: ChartTypeUpdateRequest,
    session: Session = Depends(get_session),
):
    """Change a chart's visualization type in place."""
    return session.update_chart_type(index, request.type)


@router.get("/{index}/spec", response_model=ChartSpecResponse)
async def get_chart_spec(index: int, session: Session = Depends(get_session)):
    """Plotly figure for the chart at ``index``, rendered against the dataset."""
    chart, spec = session.chart_spec(index)
    return ChartSpecResponse(chart_id=chart.id, spec=spec)
