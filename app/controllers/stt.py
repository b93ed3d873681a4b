"""Speech-to-text proxy endpoint.

`POST /api/stt` accepts a multipart upload (`file`, optional
`response_format`), forwards it once to the upstream STT service named by
`STT_API_ENDPOINT` and relays the upstream status, content type and body
back as a file download. The browser never learns the upstream address.

Outcomes per request:

1. 500 when the upstream endpoint is not configured (checked before the
   body is read).
2. 500 when the body is not a form at all, 400 when it is a form
   without a `file` part.
3. 504 when the upstream does not answer within the time bound.
4. 500 for any other forwarding failure; details stay in the logs.
5. Otherwise the upstream response, streamed.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from starlette.datastructures import UploadFile

from app.controllers.dependencies import SttConfigDep, SttProxyServiceDep
from app.services import (
    DEFAULT_RESPONSE_FORMAT,
    FALLBACK_UPLOAD_NAME,
    SttProxyError,
    UpstreamTimeoutError,
    build_content_disposition,
    derive_download_filename,
    relay_upstream_body,
)
from app.views import ErrorResponse

router = APIRouter(prefix="/api/stt", tags=["stt"])

logger = logging.getLogger(__name__)

MISSING_ENDPOINT_DETAIL = "STT_API_ENDPOINT not configured"
NO_FILE_DETAIL = "No file provided"
TIMEOUT_DETAIL = "Upstream request timed out"
PROXY_ERROR_DETAIL = "Proxy error"

# request.form() silently yields an empty form for anything else.
_FORM_MEDIA_TYPES = frozenset({"multipart/form-data", "application/x-www-form-urlencoded"})

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": NO_FILE_DETAIL},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorResponse,
        "description": "Proxy misconfigured or upstream call failed",
    },
    status.HTTP_504_GATEWAY_TIMEOUT: {"model": ErrorResponse, "description": TIMEOUT_DETAIL},
}


@router.post("", response_class=StreamingResponse, responses=_ERROR_RESPONSES)
async def proxy_transcription(
    request: Request,
    stt_config: SttConfigDep,
    service: SttProxyServiceDep,
) -> StreamingResponse:
    """Forward an audio upload to the upstream STT service and relay its answer."""

    endpoint = stt_config.api_endpoint
    if not endpoint:
        logger.error("Rejecting upload: STT_API_ENDPOINT is not set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MISSING_ENDPOINT_DETAIL,
        )

    content_type = request.headers.get("content-type", "")
    media_type = content_type.partition(";")[0].strip().lower()
    if media_type not in _FORM_MEDIA_TYPES:
        logger.error("Inbound body is not a form: content-type=%r", content_type)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PROXY_ERROR_DETAIL,
        )

    try:
        form = await request.form()
    except Exception as exc:
        logger.exception("Could not parse inbound multipart body")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PROXY_ERROR_DETAIL,
        ) from exc

    try:
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=NO_FILE_DETAIL,
            )

        raw_format = form.get("response_format")
        response_format = raw_format if isinstance(raw_format, str) else DEFAULT_RESPONSE_FORMAT
        original_name = upload.filename or FALLBACK_UPLOAD_NAME

        try:
            upstream = await service.forward(
                endpoint,
                file=upload.file,
                filename=original_name,
                content_type=upload.content_type,
                response_format=response_format,
            )
        except UpstreamTimeoutError as exc:
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail=TIMEOUT_DETAIL,
            ) from exc
        except SttProxyError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=PROXY_ERROR_DETAIL,
            ) from exc
    finally:
        # The upload has been fully sent (or abandoned) by now.
        await form.close()

    download_name = derive_download_filename(original_name, response_format)
    headers = {"Content-Disposition": build_content_disposition(download_name)}
    upstream_content_type = upstream.headers.get("content-type")
    if upstream_content_type:
        headers["Content-Type"] = upstream_content_type

    logger.info(
        "Relaying upstream status=%s as %s",
        upstream.status_code,
        download_name,
    )
    return StreamingResponse(
        relay_upstream_body(upstream),
        status_code=upstream.status_code,
        headers=headers,
    )
