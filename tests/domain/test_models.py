import dataclasses

import pytest

from git_shelf.domain.errors import ProcessFailed, ResolutionFailed, ShelfError
from git_shelf.domain.models import CommitRecord, RepositoryDescriptor


class TestRepositoryDescriptor:
    def test_creation(self):
        r = RepositoryDescriptor(name="alpha.git", head="main", files=["a.txt"])
        assert r.name == "alpha.git"
        assert r.head == "main"
        assert r.files == ["a.txt"]

    def test_files_absent_by_default(self):
        assert RepositoryDescriptor(name="alpha.git", head="main").files is None

    def test_frozen(self):
        r = RepositoryDescriptor(name="alpha.git", head="main")
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.head = "dev"  # type: ignore[misc]


class TestCommitRecord:
    def test_creation(self):
        c = CommitRecord(hash="abc123", message="fix bug")
        assert c.hash == "abc123"
        assert c.message == "fix bug"

    def test_equality(self):
        assert CommitRecord("abc123", "") == CommitRecord(hash="abc123", message="")


class TestErrors:
    def test_process_failed_fields(self):
        err = ProcessFailed("/srv/a.git", ("log", "--oneline"), 128, "fatal: bad\n")
        assert isinstance(err, ShelfError)
        assert err.repo_path == "/srv/a.git"
        assert err.git_args == ("log", "--oneline")
        assert err.returncode == 128
        assert err.output == "fatal: bad\n"
        assert str(err) == "git log --oneline failed in /srv/a.git: fatal: bad"

    def test_process_failed_without_output(self):
        err = ProcessFailed("/srv/a.git", ("branch",), 1, "")
        assert str(err).endswith("no output")

    def test_resolution_failed_context(self):
        err = ResolutionFailed("/srv/a.git", "dev")
        assert isinstance(err, ShelfError)
        assert err.ref == "dev"
        assert "/srv/a.git" in str(err)
        assert "'dev'" in str(err)
