from __future__ import annotations

import io
import json
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator, List

from pydantic import BaseModel, ValidationError

from ingredient_audit.config import Settings
from ingredient_audit.core.models import AnalysisReport, IngredientAssignment
from ingredient_audit.services.exceptions import RepoError


# Cross-platform file lock (fcntl for *nix; msvcrt for Windows)
@contextmanager
def _locked(path: str) -> Iterator[io.FileIO]:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    f = open(path, "a+b")  # create if missing
    try:
        try:
            import fcntl  # type: ignore
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            locker = ("fcntl", None)
        except ImportError:
            try:
                import msvcrt  # type: ignore
                msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
                locker = ("msvcrt", 1)
            except (ImportError, OSError) as e:
                f.close()
                raise RepoError(f"Could not lock file {path}: {e}") from e
        yield f
    finally:
        try:
            if locker[0] == "fcntl":
                import fcntl  # type: ignore
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            else:
                import msvcrt  # type: ignore
                msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, locker[1])
        except (OSError, UnboundLocalError):
            pass
        f.close()


def _atomic_write(path: str, data: bytes) -> None:
    d = os.path.dirname(path) or "."
    os.makedirs(d, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=d)
    try:
        with os.fdopen(fd, "wb") as w:
            w.write(data)
            w.flush()
            os.fsync(w.fileno())
        os.replace(tmp, path)
    except OSError as e:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise RepoError(f"Atomic write failed for {path}: {e}") from e


def _dump(model: BaseModel) -> bytes:
    return json.dumps(model.model_dump(mode="json"), ensure_ascii=False, indent=2).encode("utf-8")


class JSONReportRepo:
    """Stores the latest analysis report as a pretty-printed JSON document."""

    def __init__(self, settings: Settings, path: str | None = None):
        self.path = path or settings.report_file

    def save(self, report: AnalysisReport) -> None:
        _atomic_write(self.path, _dump(report))

    def load(self) -> AnalysisReport:
        try:
            if not os.path.exists(self.path):
                return AnalysisReport()
            with open(self.path, "rb") as f:
                raw = f.read() or b"{}"
            return AnalysisReport(**json.loads(raw.decode("utf-8")))
        except (OSError, ValueError) as e:
            raise RepoError(f"Failed to load report from {self.path}: {e}") from e


def load_assignments(path: str) -> List[IngredientAssignment]:
    """Read a JSON array of subcategory assignments."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            rows = json.load(f)
        return [IngredientAssignment(**row) for row in rows]
    except FileNotFoundError as e:
        raise RepoError(f"Assignment data not found: {path}") from e
    except (OSError, ValueError, TypeError, ValidationError) as e:
        raise RepoError(f"Failed to load assignments from {path}: {e}") from e
