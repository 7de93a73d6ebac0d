"""Project create/read routes."""
from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Optional

from litestar import Request, Response, get, post
from litestar.params import Parameter

from brollgen.config import Config
from brollgen.errors import BrollError, InvalidInputError, UnauthenticatedError
from brollgen.extract import resolve_script
from brollgen.projects import ProjectStore
from webui.backend.models import ProjectForm
from webui.backend.routes import broll

log = logging.getLogger(__name__)

UserHeader = Annotated[Optional[str], Parameter(header="X-User-Id", required=False)]


def _require_user(user_id: str | None) -> str:
    if not user_id or not user_id.strip():
        raise UnauthenticatedError("You must be logged in to submit a project.")
    return user_id.strip()


def _save_and_generate(uid: str, form: ProjectForm, filename: str | None, payload: bytes | None) -> dict:
    """Blocking half of project creation: extract, persist, optionally generate."""
    script = resolve_script(form.description, filename, payload)

    cfg = Config.load()
    store = ProjectStore(cfg.data_dir)
    project = store.create(uid, form.title, script)

    body: dict = {"project": project.to_wire()}
    if not form.generate:
        return body

    # Generation problems never undo the saved project
    try:
        outcome = broll.run_generation(cfg, script)
    except BrollError as e:
        log.warning("B-roll generation skipped for project %s: %s", project.id, e.message)
        body["broll"] = {"success": False, **e.to_dict()}
        return body

    broll_body, _ = broll.outcome_to_body(outcome)
    if outcome.ok:
        project = store.attach_prompts(uid, project.id, outcome.result.prompts)
        body["project"] = project.to_wire()
    else:
        broll_body = {"success": False, **broll_body}
    body["broll"] = broll_body
    return body


@post("/api/projects")
async def create_project(request: Request, user_id: UserHeader = None) -> Response[dict]:
    uid = _require_user(user_id)
    form = ProjectForm.from_form(await request.form())
    if not form.title.strip():
        raise InvalidInputError("Title is required.")

    filename, payload = None, None
    if form.file is not None:
        filename = form.file.filename
        payload = await form.file.read()

    body = await asyncio.to_thread(_save_and_generate, uid, form, filename, payload)
    return Response(content=body, status_code=201)


@get("/api/projects", sync_to_thread=True)
def list_projects(user_id: UserHeader = None) -> list[dict]:
    uid = _require_user(user_id)
    store = ProjectStore(Config.load().data_dir)
    return [p.to_wire() for p in store.list_projects(uid)]


@get("/api/projects/{project_id:str}", sync_to_thread=True)
def get_project(project_id: str, user_id: UserHeader = None) -> dict:
    uid = _require_user(user_id)
    store = ProjectStore(Config.load().data_dir)
    return store.get(uid, project_id).to_wire()
