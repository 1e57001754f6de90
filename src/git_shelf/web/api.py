from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from git_shelf.application.catalog import RepositoryCatalog, default_root_dir
from git_shelf.domain.errors import ProcessFailed, ResolutionFailed
from git_shelf.infrastructure.git_cli_runner import DEFAULT_TIMEOUT, GitCliRunner
from git_shelf.web.models import (
    Commit,
    RepositoryCommits,
    RepositoryDetail,
    RepositorySummary,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    root_dir = getattr(app.state, "root_dir", None) or default_root_dir()
    timeout = getattr(app.state, "timeout", None) or DEFAULT_TIMEOUT
    app.state.catalog = RepositoryCatalog(
        root_dir,
        runner=GitCliRunner(timeout=timeout),
        suffix=getattr(app.state, "suffix", ""),
    )
    yield


app = FastAPI(title="git-shelf", lifespan=lifespan)


def _catalog() -> RepositoryCatalog:
    return app.state.catalog


@app.exception_handler(ProcessFailed)
async def _process_failed(request: Request, exc: ProcessFailed):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(ResolutionFailed)
async def _resolution_failed(request: Request, exc: ResolutionFailed):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def _detail(name: str, ref: str) -> RepositoryDetail:
    repo = _catalog().get_repository(name, ref, include_files=True)
    if repo is None:
        raise HTTPException(status_code=404, detail="Repository not found")
    return RepositoryDetail(
        name=repo.name,
        head=repo.head,
        files=repo.files or [],
        branches=_catalog().branches(name) or [],
    )


@app.get("/api/repos", response_model=list[RepositorySummary])
def list_repos(
    skip_failures: bool = Query(
        False, description="Leave out repositories git cannot read instead of failing",
    ),
):
    return [
        RepositorySummary(name=r.name, head=r.head)
        for r in _catalog().list_repositories(skip_failures=skip_failures)
    ]


@app.get("/api/repos/{name}", response_model=RepositoryDetail)
def get_repo(name: str, ref: str = Query("", description="Reference to browse")):
    return _detail(name, ref)


@app.get("/api/repos/{name}/{ref}", response_model=RepositoryDetail)
def get_repo_at(name: str, ref: str):
    return _detail(name, ref)


@app.get("/api/repos/{name}/{ref}/commits", response_model=RepositoryCommits)
def list_repo_commits(name: str, ref: str):
    repo = _catalog().get_repository(name, ref)
    if repo is None:
        raise HTTPException(status_code=404, detail="Repository not found")
    commits = _catalog().commits(name, repo.head) or []
    return RepositoryCommits(
        name=repo.name,
        head=repo.head,
        commits=[Commit(hash=c.hash, message=c.message) for c in commits],
    )
