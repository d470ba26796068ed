"""Runtime wiring: settings -> token store -> HTTP transport -> gateway."""

from __future__ import annotations

import logging
from typing import Optional

from inca.adapters.http_client import HttpConfig, HttpTransport
from inca.adapters.token_store import MemoryTokenStore, TokenStoreLocal
from inca.adapters.transcoding_gateway import TranscodingGateway
from inca.domain.ports import TokenStorePort
from inca.utils import logging as logging_utils

from .settings import ClientSettings

_LOG = logging.getLogger(__name__)


def build_token_store(settings: ClientSettings) -> TokenStorePort:
    if settings.token_path:
        return TokenStoreLocal(settings.token_path)
    return MemoryTokenStore()


def build_gateway(
    settings: Optional[ClientSettings] = None,
    *,
    token_store: Optional[TokenStorePort] = None,
    configure_logging: bool = True,
) -> TranscodingGateway:
    """Create the transcoding gateway used by services and callers.

    Args:
        settings: Client settings; read from ``INCA_*`` variables when omitted.
        token_store: Credential store overriding the one derived from settings.
        configure_logging: Apply ``INCA_LOG_LEVEL`` / ``INCA_DEBUG`` to the root
            logger. Hosts that own logging setup pass ``False``.
    """
    if configure_logging:
        logging_utils.configure_root()
    settings = settings or ClientSettings.from_env()
    store = token_store or build_token_store(settings)
    cfg = HttpConfig(
        request_timeout_s=settings.request_timeout_s,
        retries=settings.retries,
        tenant_id=settings.tenant_id,
    )
    transport = HttpTransport(settings.base_url, token_store=store, cfg=cfg)
    _LOG.debug("Gateway wired for %s (tenant=%s)", settings.base_url, settings.tenant_id)
    return TranscodingGateway(transport)


__all__ = ["build_gateway", "build_token_store"]
