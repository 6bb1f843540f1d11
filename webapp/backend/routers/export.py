"""Export a distribution to Excel (DISTRIBUTION + ROOMS sheets)."""
import io
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from schemas import ExportRequest, to_config, to_distribution
from supervision.validate import validate_distribution
from supervision.write_schedule import build_workbook

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("/excel")
def export_excel(req: ExportRequest):
    cfg = to_config(req.config)
    distribution = to_distribution(req.days)

    valid, violations = validate_distribution(distribution, cfg, req.candidates)
    if not valid:
        raise HTTPException(400, {"message": "Distribution is not valid", "violations": violations[:20]})

    wb = build_workbook(distribution, req.candidates, cfg)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="distribution.xlsx"'},
    )
