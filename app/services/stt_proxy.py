"""Upstream speech-to-text forwarding with a hard time bound."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import AsyncIterator, BinaryIO

import httpx

from app.config.settings import settings
from app.telemetry import observe_upstream

logger = logging.getLogger(__name__)

FALLBACK_UPLOAD_NAME = "upload.wav"
DEFAULT_RESPONSE_FORMAT = "text"
_DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"


class SttProxyError(RuntimeError):
    """Raised when the upstream STT call cannot produce a response to relay."""


class UpstreamTimeoutError(SttProxyError):
    """Raised when the upstream does not answer within the time bound."""


class UpstreamRequestError(SttProxyError):
    """Raised for connection, protocol or request-construction failures."""


class SttProxyService:
    """Forward uploads to the upstream STT service.

    Exactly one attempt is made per call; there is no retry so a slow or
    metered upstream never receives the same audio twice. The returned
    response is opened in streaming mode and must be consumed through
    :func:`relay_upstream_body` (or closed explicitly).
    """

    def __init__(
        self,
        timeout_seconds: float,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._client = client

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout_seconds),
            )
        return self._client

    async def forward(
        self,
        endpoint: str,
        *,
        file: BinaryIO,
        filename: str | None,
        content_type: str | None,
        response_format: str,
    ) -> httpx.Response:
        """POST the upload to ``endpoint`` and return once status and headers arrive."""

        client = self._get_client()
        upload_name = filename or FALLBACK_UPLOAD_NAME
        start_time = time.perf_counter()

        logger.info(
            "Forwarding upload filename=%s response_format=%s timeout=%ss",
            upload_name,
            response_format,
            self._timeout_seconds,
        )

        try:
            request = client.build_request(
                "POST",
                endpoint,
                data={"response_format": response_format},
                files={
                    "file": (
                        upload_name,
                        file,
                        content_type or _DEFAULT_UPLOAD_CONTENT_TYPE,
                    )
                },
            )
            # wait_for cancels the in-flight send, which releases the connection.
            response = await asyncio.wait_for(
                client.send(request, stream=True),
                timeout=self._timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            elapsed = time.perf_counter() - start_time
            observe_upstream("timeout", elapsed)
            logger.warning(
                "Upstream STT request timed out after %.1fs filename=%s",
                elapsed,
                upload_name,
            )
            raise UpstreamTimeoutError("Upstream request timed out") from exc
        except Exception as exc:
            observe_upstream("failed", time.perf_counter() - start_time)
            logger.exception("Upstream STT request failed filename=%s", upload_name)
            raise UpstreamRequestError("Upstream request failed") from exc

        elapsed = time.perf_counter() - start_time
        observe_upstream("relayed", elapsed)
        logger.info(
            "Upstream answered status=%s content_type=%s after %.1fs",
            response.status_code,
            response.headers.get("content-type"),
            elapsed,
        )
        return response

    async def aclose(self) -> None:
        """Close the pooled HTTP client, if one was opened."""

        if self._client is not None:
            await self._client.aclose()
            self._client = None


async def relay_upstream_body(response: httpx.Response) -> AsyncIterator[bytes]:
    """Yield the upstream body chunk by chunk, closing the response afterwards."""

    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    except httpx.HTTPError as exc:
        # Status and headers are already sent; the caller sees a truncated body.
        logger.warning("Upstream body stream broke mid-relay: %r", exc)
        raise
    finally:
        await response.aclose()


def get_stt_proxy_service() -> SttProxyService:
    """Return the process-wide proxy service singleton."""
    return _DEFAULT_SERVICE


_DEFAULT_SERVICE = SttProxyService(timeout_seconds=settings.stt.timeout_seconds)
