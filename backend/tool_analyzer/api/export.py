"""
Tool Analyzer Backend — Export API (POST /api/export/{fmt})

Stateless: the caller posts back the AnalysisResult it holds and receives a
file download in the requested format.
"""

from fastapi import APIRouter, HTTPException, Response

from tool_analyzer.api.deps import RequestId
from tool_analyzer.config import log
from tool_analyzer.export import EXPORT_FORMATS
from tool_analyzer.models import AnalysisResult

router = APIRouter(prefix="/api/export", tags=["export"])


@router.post("/{fmt}")
async def export_result(fmt: str, result: AnalysisResult, request_id: RequestId) -> Response:
    """
    POST /api/export/{fmt}   fmt: "csv" | "json" | "markdown"

    Returns 404 for an unknown format.
    """
    export_format = EXPORT_FORMATS.get(fmt)
    if export_format is None:
        raise HTTPException(status_code=404, detail=f"Unknown export format: {fmt}")

    content = export_format.render(result)
    log("INFO", "result exported", request_id=request_id, format=fmt, rows=len(result.rows), ideas=len(result.ideas))
    return Response(
        content=content,
        media_type=export_format.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_format.filename}"'},
    )
