import json
import logging
from pathlib import Path
from typing import Any

from core.models import InventoryReport

logger = logging.getLogger("hostinventory.report")


def report_path(report: InventoryReport, out_dir: str | Path) -> Path:
    return Path(out_dir) / f"{report.computer}.json"


def write_json_report(report: InventoryReport, out_dir: str | Path) -> Path:
    """
    Write `<computer>.json` into out_dir, creating the directory if needed.
    An existing file with the same name is overwritten.
    """
    out_path = report_path(report, out_dir)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("Report written to %s", out_path)
    return out_path


def load_json_report(path: str | Path) -> dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
