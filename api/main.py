# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for Clinical Record Structuring

Provides a REST API that turns an uploaded record export (PDF) into pages,
encounters and clinical notes.
"""

from typing import Any, Dict

from fastapi import FastAPI, UploadFile, File, HTTPException

from clinical_structuring import DocumentStructuringPipeline
from clinical_structuring.config import logging_settings
from clinical_structuring.utils.exceptions import PDFExtractionError
from clinical_structuring.utils.logging import get_logger, setup_logging

setup_logging(
    level=logging_settings.LOG_LEVEL,
    log_file=logging_settings.LOG_FILE,
    format_json=logging_settings.LOG_JSON
)

logger = get_logger(__name__)

app = FastAPI(
    title="Clinical Record Structuring API",
    description="Structure medical record exports into pages, encounters and clinical notes",
    version="1.0.0",
)

pipeline = DocumentStructuringPipeline()


@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/api/parse")
async def parse_document(file: UploadFile = File(...)) -> Dict[str, Any]:
    """
    Structure an uploaded PDF.

    Returns pages (text + markdown), encounters and clinical notes.
    """
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    file_name = file.filename or "document.pdf"
    logger.info(f"Structuring upload {file_name} ({len(content)} bytes)")

    try:
        result = await pipeline.process_pdf_async(content, file_name=file_name)
    except PDFExtractionError as e:
        logger.warning(f"Rejected {file_name}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return result.to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
