"""
Alumnos API: Upload Route Handler
=================================

What:  POST /upload accepts one multipart field, `archivo`, and stores the
       file unchanged in the upload directory under its original name.
Why:   Lets clients drop documents next to the service (the historical
       `archivos/` folder).

Request Flow:
    1. Client sends multipart/form-data with an 'archivo' field
    2. FastAPI extracts the UploadFile
    3. FileService writes it to <upload_dir>/<original filename>
    4. 200 {"message": ...}; a same-named earlier upload is overwritten
"""

import logging

from fastapi import APIRouter, File, Request, UploadFile

from alumnos_api.schemas.student import MessageResponse
from alumnos_api.services.file_service import FileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])

UPLOADED_MESSAGE = "File uploaded successfully"


@router.post(
    "/upload",
    response_model=MessageResponse,
    responses={
        400: {"description": "No file name supplied", "model": MessageResponse},
        500: {"description": "File could not be written", "model": MessageResponse},
    },
    summary="Upload a file",
)
async def upload_file(
    request: Request,
    archivo: UploadFile = File(..., description="File to store under its original name"),
) -> MessageResponse:
    file_service: FileService = request.app.state.file_service
    try:
        content = await archivo.read()
        logger.info(
            "Received upload: filename=%s, size=%d bytes",
            archivo.filename or "unknown",
            len(content),
        )
        await file_service.store(archivo.filename, content)
    finally:
        await archivo.close()
    return MessageResponse(message=UPLOADED_MESSAGE)
