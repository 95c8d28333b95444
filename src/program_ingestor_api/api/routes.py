"""HTTP routes for document extraction and stored templates."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from program_ingestor_api.config import settings
from program_ingestor_api.extraction import process_document
from program_ingestor_api.services.summary_service import SummaryService, SummaryServiceError
from program_ingestor_api.services.template_store import InMemoryTemplateStore, TemplateStore


logger = logging.getLogger(__name__)

router = APIRouter()

_template_store = InMemoryTemplateStore()


def get_template_store() -> TemplateStore:
    return _template_store


def get_summary_service() -> SummaryService:
    return SummaryService()


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True}


# ---------------------------------------------------------------------------
# Document extraction
# ---------------------------------------------------------------------------


@router.post("/extract/document")
async def extract_document(
    file: UploadFile = File(...),
    summarize: Optional[bool] = Form(None),
    store: bool = Form(True),
    template_store: TemplateStore = Depends(get_template_store),
    summary_service: SummaryService = Depends(get_summary_service),
):
    """
    Extract a workout program from an uploaded document.

    Always returns a ProcessingResult; extraction failures surface as
    method='manual' with warnings, never as HTTP errors.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="Uploaded file has no filename")

    limit = settings.MAX_UPLOAD_BYTES
    if file.size is not None and file.size > limit:
        raise HTTPException(status_code=413, detail=f"File too large ({file.size} bytes, limit {limit})")

    # Never buffer more than one byte past the limit
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(status_code=413, detail=f"File too large (over {limit} bytes)")

    result = await run_in_threadpool(process_document, content, file.filename)

    response = result.model_dump(mode="json")

    if store and result.success:
        response["template_id"] = template_store.save(result.template)

    if summarize is None:
        summarize = settings.USE_LLM_SUMMARY

    if summarize and result.success:
        try:
            response["summary"] = await run_in_threadpool(summary_service.summarize, result)
        except SummaryServiceError as e:
            logger.warning(f"Summary unavailable for {file.filename}: {e}")
            response["warnings"].append(f"Summary unavailable: {e}")

    return JSONResponse(response)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


@router.get("/templates/{template_id}")
def get_template(template_id: str, template_store: TemplateStore = Depends(get_template_store)):
    """Fetch a stored template."""
    template = template_store.get(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template {template_id} not found")
    return JSONResponse(template.model_dump(mode="json"))
