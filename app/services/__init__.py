"""Service layer helpers for external integrations."""

from .filenames import (
    build_content_disposition,
    derive_download_filename,
    extension_for_format,
)
from .stt_proxy import (
    DEFAULT_RESPONSE_FORMAT,
    FALLBACK_UPLOAD_NAME,
    SttProxyError,
    SttProxyService,
    UpstreamRequestError,
    UpstreamTimeoutError,
    get_stt_proxy_service,
    relay_upstream_body,
)

__all__ = [
    "DEFAULT_RESPONSE_FORMAT",
    "FALLBACK_UPLOAD_NAME",
    "SttProxyError",
    "SttProxyService",
    "UpstreamRequestError",
    "UpstreamTimeoutError",
    "get_stt_proxy_service",
    "relay_upstream_body",
    "build_content_disposition",
    "derive_download_filename",
    "extension_for_format",
]
