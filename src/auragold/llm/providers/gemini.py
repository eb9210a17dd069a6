from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import requests

from ...i18n import t
from ...ledger.model import TradeRecord
from ...metrics.llm import get_llm_calls_total, get_llm_tokens_total
from ..client import SummaryClient, trade_digest

logger = logging.getLogger(__name__)

API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_MODEL = "gemini-3-flash-preview"

SYSTEM_INSTRUCTIONS = {
    "zh": "你是一名专门从事贵金属交易的精英商品交易员和财务分析师。请用中文回答。",
    "en": "You are an elite commodities trader and financial analyst specializing in precious metals.",
}


def build_prompt(records: List[TradeRecord], lang: str) -> str:
    language = "Chinese" if lang == "zh" else "English"
    return (
        f"Analyze the following gold trading history and provide a professional, concise summary in {language}.\n"
        "Focus on trends in profit margins, the impact of handling fees, and suggestions for future trades.\n\n"
        f"Data:\n{json.dumps(trade_digest(records), ensure_ascii=False)}"
    )


class GeminiClient(SummaryClient):
    def __init__(self, config: Optional[Dict[str, Any]] = None, session: Optional[requests.Session] = None):
        self.cfg = config or {}
        self.api_key = self.cfg.get("api_key") or os.getenv("GEMINI_API_KEY", "")
        self.model = self.cfg.get("model") or DEFAULT_MODEL
        self.temperature = float(self.cfg.get("temperature", 0.7))
        self.timeout_s = float(self.cfg.get("timeout_s", 30))
        self.session = session or requests.Session()

    def summarize(self, records: List[TradeRecord], lang: str = "zh") -> str:
        if not records:
            return t(lang, "ai_no_data")
        if not self.api_key:
            logger.warning("GEMINI_API_KEY not set; trade analysis unavailable")
            return t(lang, "ai_offline")

        body = {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTIONS.get(lang, SYSTEM_INSTRUCTIONS["en"])}]},
            "contents": [{"role": "user", "parts": [{"text": build_prompt(records, lang)}]}],
            "generationConfig": {"temperature": self.temperature},
        }
        calls = get_llm_calls_total()
        try:
            resp = self.session.post(
                API_URL.format(model=self.model),
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json=body,
                timeout=self.timeout_s,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            calls.labels("gemini", "false").inc()
            logger.error("Gemini request failed: %s", e)
            return t(lang, "ai_offline")

        calls.labels("gemini", "true").inc()
        self._record_usage(data)
        text = _response_text(data)
        return text or t(lang, "ai_error")

    def _record_usage(self, data: Dict[str, Any]) -> None:
        usage = data.get("usageMetadata") or {}
        tokens = get_llm_tokens_total()
        prompt = usage.get("promptTokenCount")
        output = usage.get("candidatesTokenCount")
        if isinstance(prompt, int):
            tokens.labels("gemini", "prompt").inc(prompt)
        if isinstance(output, int):
            tokens.labels("gemini", "output").inc(output)


def _response_text(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
