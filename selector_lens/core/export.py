"""
Serializable snapshot of a test run.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from .models import Selector, TestResult


def export_payload(selector: Selector, result: TestResult, timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the export document for a test run.

    Args:
        selector: The selector that was tested
        result: Its result
        timestamp: When the export was taken (default: now)

    Returns:
        Dict with selector, type, matches, count, executionTime and timestamp
    """
    payload: Dict[str, Any] = {
        "selector": selector.expression,
        "type": selector.kind,
        "matches": [m.to_dict() for m in result.matches],
        "count": result.count,
        "executionTime": result.execution_time_ms,
        "timestamp": (timestamp or datetime.now()).isoformat(),
    }
    if result.error is not None:
        payload["error"] = result.error
    return payload


def export_json(selector: Selector, result: TestResult, timestamp: Optional[datetime] = None) -> str:
    return json.dumps(export_payload(selector, result, timestamp), indent=2)
