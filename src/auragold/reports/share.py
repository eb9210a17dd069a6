from __future__ import annotations

from ..i18n import t
from ..ledger.stats import TradeSummary

RULE = "-" * 35


def build_share_report_text(
    ledger_name: str,
    summary: TradeSummary,
    tx_count: int,
    generated_at: str,
    lang: str = "zh",
) -> str:
    """Plain-text profit report suitable for pasting into a chat."""
    lines = [
        f"[{ledger_name}] {t(lang, 'report_title')}",
        RULE,
        f"- {t(lang, 'report_actual')}: ￥{summary.total_profit:.2f}",
        f"- {t(lang, 'report_projected')}: ￥{summary.total_projected_profit:.2f}",
        f"- {t(lang, 'report_diff')}: ￥{summary.profit_difference:.2f}",
        f"- {t(lang, 'report_volume')}: {summary.total_grams:.2f}g",
        f"- {t(lang, 'report_count')}: {tx_count}",
        RULE,
        f"{t(lang, 'report_date')}: {generated_at}",
    ]
    return "\n".join(lines)
