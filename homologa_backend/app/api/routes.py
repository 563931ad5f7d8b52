from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import NotFoundError, ValidationError
from app.schemas.comparison import (
    CompareByProgramRequest,
    CompareRequest,
    CompareTextRequest,
    CompareTextResponse,
    ComparisonResult,
)
from app.schemas.dual_degree import DualDegreeRequest, DualDegreeResult
from app.schemas.history import TranscriptParseRequest, TranscriptParseResponse
from app.schemas.program import CurriculumOverview, CurriculumResponse, ProgramResponse
from app.services.comparison import compare_history_to_curriculum, compare_transcript_text
from app.services.curricula import get_curriculum_overview, list_curricula, list_programs
from app.services.dual_degree import compare_dual_degree
from app.services.transcript_parser import parse_transcript_pdf, parse_transcript_text

router = APIRouter(prefix="/api")


def _not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc))


# ── Programs and curricula ────────────────────────────────────────────────────

@router.get("/programs", response_model=list[ProgramResponse])
def list_programs_endpoint(db: Session = Depends(get_db)):
    return list_programs(db)


@router.get("/programs/{program_code}/curricula", response_model=list[CurriculumResponse])
def list_curricula_endpoint(program_code: str, db: Session = Depends(get_db)):
    try:
        return list_curricula(db, program_code)
    except NotFoundError as exc:
        raise _not_found(exc)


@router.get("/curricula/{curriculum_id}", response_model=CurriculumOverview)
def get_curriculum_endpoint(curriculum_id: int, db: Session = Depends(get_db)):
    try:
        return get_curriculum_overview(db, curriculum_id)
    except NotFoundError as exc:
        raise _not_found(exc)


# ── Transcripts ───────────────────────────────────────────────────────────────

@router.post("/transcripts/parse", response_model=TranscriptParseResponse)
def parse_transcript_endpoint(payload: TranscriptParseRequest):
    courses = parse_transcript_text(payload.text)
    return TranscriptParseResponse(courses=courses, total_courses=len(courses))


@router.post("/transcripts/parse-pdf", response_model=TranscriptParseResponse)
def parse_transcript_pdf_endpoint(file: UploadFile = File(...)):
    data = file.file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File exceeds upload limit.")
    courses = parse_transcript_pdf(data)
    return TranscriptParseResponse(courses=courses, total_courses=len(courses))


# ── Comparisons ───────────────────────────────────────────────────────────────

@router.post("/compare", response_model=ComparisonResult)
def compare_endpoint(payload: CompareRequest, db: Session = Depends(get_db)):
    try:
        return compare_history_to_curriculum(db, payload.courses, curriculum_id=payload.curriculum_id)
    except NotFoundError as exc:
        raise _not_found(exc)


@router.post("/compare/by-program", response_model=ComparisonResult)
def compare_by_program_endpoint(payload: CompareByProgramRequest, db: Session = Depends(get_db)):
    try:
        return compare_history_to_curriculum(db, payload.courses, program_code=payload.program_code)
    except NotFoundError as exc:
        raise _not_found(exc)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/compare/text", response_model=CompareTextResponse)
def compare_text_endpoint(payload: CompareTextRequest, db: Session = Depends(get_db)):
    try:
        return compare_transcript_text(db, payload.academic_history_text, payload.program_code)
    except NotFoundError as exc:
        raise _not_found(exc)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/dual-degree", response_model=DualDegreeResult)
def dual_degree_endpoint(payload: DualDegreeRequest, db: Session = Depends(get_db)):
    try:
        return compare_dual_degree(
            db,
            payload.origin_history,
            payload.dual_history,
            payload.target_program_code,
        )
    except NotFoundError as exc:
        raise _not_found(exc)
