from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional, Dict

from ingredient_audit.config import Settings
from ingredient_audit.services.exceptions import RepoError
from ingredient_audit.services.json_repo import _locked  # reuse existing cross-platform lock

logger = logging.getLogger(__name__)


class MetricsLogger:
    """Append-only JSONL logger for analysis run metrics under data/.

    Writes one JSON object per line with fields:
      - ts: ISO timestamp (UTC)
      - kind: "latency"
      - name: short name (e.g., "analyze", "match", "parse_recipe")
      - origin: "api" | "cli"
      - duration_ms: float
      - extra: optional dict with counts (records, issues, ...)
    """

    def __init__(self, settings: Optional[Settings] = None, filename: str = "audit_metrics.jsonl") -> None:
        self.settings = settings or Settings()
        self.path = os.path.join(self.settings.data_dir, filename)

    def log_latency(
        self,
        name: str,
        duration_ms: float,
        origin: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "kind": "latency",
            "name": name,
            "origin": origin,
            "duration_ms": round(float(duration_ms), 3),
        }
        if extra:
            entry["extra"] = extra
        line = (json.dumps(entry, ensure_ascii=False, separators=(",", ":")) + "\n").encode("utf-8")
        try:
            with _locked(self.path) as f:
                f.seek(0, os.SEEK_END)
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except (OSError, RepoError) as e:
            # Metrics should never impact the audit itself.
            logger.warning("Could not write metrics to %s: %s", self.path, e)
