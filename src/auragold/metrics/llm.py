"""LLM metrics for trade summaries.

Counters:
- llm_calls_total{provider,ok}
- llm_tokens_total{provider,type="prompt|output"}
"""

from __future__ import annotations

from typing import Any, Optional

from .core import safe_counter

_llm_calls: Optional[Any] = None
_llm_tokens: Optional[Any] = None


def get_llm_calls_total():
    global _llm_calls
    if _llm_calls is None:
        _llm_calls = safe_counter("llm_calls_total", "LLM calls", ["provider", "ok"])  # ok=true|false
    return _llm_calls


def get_llm_tokens_total():
    global _llm_tokens
    if _llm_tokens is None:
        _llm_tokens = safe_counter("llm_tokens_total", "LLM tokens", ["provider", "type"])  # type: prompt|output
    return _llm_tokens
