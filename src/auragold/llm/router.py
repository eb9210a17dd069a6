from __future__ import annotations

from typing import Any, Dict

from .client import SummaryClient
from .providers.gemini import GeminiClient
from .providers.offline import OfflineClient


def get_client(cfg: Dict[str, Any]) -> SummaryClient:
    provider = (cfg.get("provider") or "gemini").lower()
    if provider == "gemini":
        return GeminiClient(cfg)
    if provider == "offline":
        return OfflineClient(cfg)
    return GeminiClient(cfg)
