from __future__ import annotations

from pydantic import BaseModel


class RepositorySummary(BaseModel):
    name: str
    head: str


class RepositoryDetail(BaseModel):
    name: str
    head: str
    files: list[str]
    branches: list[str]


class Commit(BaseModel):
    hash: str
    message: str


class RepositoryCommits(BaseModel):
    name: str
    head: str
    commits: list[Commit]
