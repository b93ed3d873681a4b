"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.config.settings import SttProxyConfig, get_stt_config
from app.services import SttProxyService, get_stt_proxy_service

SttConfigDep = Annotated[SttProxyConfig, Depends(get_stt_config)]
SttProxyServiceDep = Annotated[SttProxyService, Depends(get_stt_proxy_service)]


__all__ = ["SttConfigDep", "SttProxyServiceDep"]
