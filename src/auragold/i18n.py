"""User-facing strings for the two supported languages."""

from __future__ import annotations

from typing import Dict, Literal, Tuple

Lang = Literal["en", "zh"]
Theme = Literal["light", "dark"]

LANGS: Tuple[str, ...] = ("en", "zh")
THEMES: Tuple[str, ...] = ("light", "dark")

MASTER_LEDGER_ID = "master"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "unsupported_json": "Unsupported JSON",
        "malformed_json": "File is not valid JSON",
        "unreadable_file": "Could not read file",
        "import_failed": "Import failed",
        "import_completed": "Import completed",
        "import_cancelled": "Import cancelled",
        "target_not_found": "Target ledger not found",
        "exported_all": "Exported JSON file",
        "exported_ledger": "Exported ledger JSON file",
        "confirm_replace_all": "Replace import will overwrite all current ledgers and settings. Continue?",
        "confirm_replace_ledger": 'This will overwrite ledger "{name}" with the file. Continue?',
        "imported_ledger": "Imported Ledger",
        "import_copy": "{base} (import {n})",
        "master_name": "All Ledgers",
        "no_ledgers": "No ledgers",
        "report_title": "Gold Trading Report",
        "report_actual": "Actual profit",
        "report_projected": "Projected profit",
        "report_diff": "Difference",
        "report_volume": "Volume",
        "report_count": "Trades",
        "report_date": "Generated",
        "ai_no_data": "No trades to analyze yet.",
        "ai_error": "The analysis service returned no text.",
        "ai_offline": "Analysis service is unavailable. Please try again later.",
    },
    "zh": {
        "unsupported_json": "JSON 格式不支持",
        "malformed_json": "文件不是有效的 JSON",
        "unreadable_file": "无法读取文件",
        "import_failed": "导入失败",
        "import_completed": "导入完成",
        "import_cancelled": "已取消导入",
        "target_not_found": "目标账本不存在",
        "exported_all": "已导出 JSON 文件",
        "exported_ledger": "已导出账本 JSON 文件",
        "confirm_replace_all": "覆盖导入会替换当前全部账本数据与设置，是否继续？",
        "confirm_replace_ledger": "将用文件记录覆盖账本「{name}」，是否继续？",
        "imported_ledger": "导入账本",
        "import_copy": "{base}（导入{n}）",
        "master_name": "全部账本",
        "no_ledgers": "暂无账本",
        "report_title": "黄金交易报告",
        "report_actual": "实际利润",
        "report_projected": "预期利润",
        "report_diff": "差额",
        "report_volume": "交易克数",
        "report_count": "交易笔数",
        "report_date": "生成时间",
        "ai_no_data": "暂无可分析的交易记录。",
        "ai_error": "分析服务未返回内容。",
        "ai_offline": "分析服务暂不可用，请稍后再试。",
    },
}


def t(lang: str, key: str, **kwargs) -> str:
    table = MESSAGES.get(lang) or MESSAGES["en"]
    text = table.get(key, MESSAGES["en"].get(key, key))
    return text.format(**kwargs) if kwargs else text
