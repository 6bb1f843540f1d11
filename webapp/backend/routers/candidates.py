from fastapi import APIRouter, HTTPException, UploadFile, File, Query

from schemas import CandidateReview
from supervision.models import FacilityConfig
from supervision.parse_inputs import CandidateFileError, EmptyCandidateList, read_candidates
from supervision.validate import dry_run_pool_check

router = APIRouter()


@router.post("/upload", response_model=CandidateReview)
def upload_candidates(
    file: UploadFile = File(...),
    two_person_rooms: int = Query(15),
    one_person_rooms: int = Query(11),
    days: int = Query(4),
):
    """
    Read names from an uploaded .xlsx/.csv and return them for review.
    Nothing is distributed here; the client confirms the list first.
    """
    content = file.file.read()
    if not content:
        raise HTTPException(400, "Please upload an Excel or CSV file.")
    try:
        names = read_candidates(content, filename=file.filename)
    except (CandidateFileError, EmptyCandidateList) as e:
        raise HTTPException(400, str(e))

    cfg = FacilityConfig(two_person_rooms=two_person_rooms, one_person_rooms=one_person_rooms, days=days)
    _, warnings = dry_run_pool_check(names, cfg)
    return CandidateReview(
        candidates=names,
        count=len(names),
        slots_per_day=cfg.slots_per_day,
        warnings=warnings,
    )
