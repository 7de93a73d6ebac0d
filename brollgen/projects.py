"""JSON-file store for user-owned projects."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import time
import uuid
from pathlib import Path

from schemas import Project, ShotPrompt

from .errors import InvalidInputError, ProjectNotFoundError

log = logging.getLogger(__name__)

PROJECTS_FILE = "projects.json"

# One lock per store file, shared by every ProjectStore pointing at it
_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _file_locks_guard:
        return _file_locks.setdefault(path.resolve(), threading.Lock())


class ProjectStore:
    """Create/read project records, keyed by owner.

    All records live in a single ``projects.json`` under *data_dir*; every
    write rewrites the file under a lock shared by all stores on that file.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self.path = Path(data_dir) / PROJECTS_FILE
        self._lock = _lock_for(self.path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, user_id: str, title: str, vsl_content: str) -> Project:
        title = (title or "").strip()
        if not title:
            raise InvalidInputError("Title is required.")
        project = Project(
            id=str(uuid.uuid4())[:8],
            user_id=user_id,
            title=title,
            vsl_content=vsl_content.strip(),
            created_at=time.time(),
        )
        with self._lock:
            records = self._read()
            records[project.id] = project.model_dump(by_alias=True)
            self._write(records)
        log.info("Project %s created for user %s", project.id, user_id)
        return project

    def get(self, user_id: str, project_id: str) -> Project:
        with self._lock:
            record = self._read().get(project_id)
        if record is None or record.get("user_id") != user_id:
            raise ProjectNotFoundError(f"Project {project_id!r} not found")
        return Project.model_validate(record)

    def list_projects(self, user_id: str) -> list[Project]:
        with self._lock:
            records = self._read()
        projects = [Project.model_validate(r) for r in records.values() if r.get("user_id") == user_id]
        return sorted(projects, key=lambda p: p.created_at, reverse=True)

    def attach_prompts(self, user_id: str, project_id: str, prompts: list[ShotPrompt]) -> Project:
        with self._lock:
            records = self._read()
            record = records.get(project_id)
            if record is None or record.get("user_id") != user_id:
                raise ProjectNotFoundError(f"Project {project_id!r} not found")
            project = Project.model_validate(record)
            project.broll_prompts = list(prompts)
            records[project_id] = project.model_dump(by_alias=True)
            self._write(records)
        return project

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _read(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            log.exception("Corrupt project store at %s", self.path)
            raise

    def _write(self, records: dict[str, dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.path.parent,
            prefix="projects.", suffix=".tmp", delete=False,
        ) as f:
            json.dump(records, f, indent=2)
        try:
            os.replace(f.name, self.path)
        except OSError:
            os.unlink(f.name)
            raise
