"""Tests for the upload-to-candidate orchestration."""

from pathlib import Path

import pytest

from app.core.config import Settings
from app.core.errors import StorageError
from app.core.pipeline import ResumePipeline, UploadedResume
from app.core.schemas import JobRoleDefinition, RequiredSkill
from app.core.storage import CandidateStore, UploadStore


OWNER = "user-1"


def _resume(name: str, email: str, skills: str = "Python, SQL, Docker, Git") -> str:
    return (
        f"{name}\n"
        f"{email}\n"
        "(555) 123-4567\n"
        f"Key Skills: {skills}\n"
        "\n"
        "6 years of experience building data platforms and backend services for retail clients.\n"
        "\n"
        "Education:\n"
        "Bachelor of Science in Computer Science, State University\n"
    )


def _txt(name: str, text: str) -> UploadedResume:
    return UploadedResume(content=text.encode("utf-8"), extension="txt", filename=name)


def _stored_files(upload_dir: Path):
    return sorted(upload_dir.iterdir()) if upload_dir.exists() else []


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def store():
    s = CandidateStore()
    s.save_job_role(JobRoleDefinition(
        id="backend", owner_id=OWNER, title="Backend Developer", experience_level="mid",
        required_skills=[RequiredSkill(skill="Python", weight=3), RequiredSkill(skill="Kubernetes", weight=1)],
    ))
    s.save_job_role(JobRoleDefinition(
        id="designer", owner_id=OWNER, title="Designer", experience_level="mid",
        required_skills=[RequiredSkill(skill="Figma", weight=1)],
    ))
    return s


@pytest.fixture
def pipeline(store, upload_dir):
    return ResumePipeline(store, UploadStore(upload_dir), settings=Settings(UPLOAD_DIR=str(upload_dir)))


def test_single_resume_is_scored_and_stored(pipeline, store, upload_dir):
    summary = pipeline.process_batch([_txt("jane.txt", _resume("Jane Doe", "Jane.Doe@Example.com"))], OWNER)

    assert (summary.total, summary.successful, summary.failed) == (1, 1, 0)
    ok = summary.results.successful[0]
    assert ok.filename == "jane.txt"
    assert ok.email == "jane.doe@example.com"

    [candidate] = store.list_candidates(OWNER)
    assert candidate.name == "Jane Doe"
    assert candidate.status == "new"
    assert candidate.experience_years == 6
    assert {"python", "sql", "docker", "git"} <= set(candidate.skills)
    # 60 (skills) + 10 (mid, 6 years) + 10 (computer science)
    assert candidate.best_match_role_id == "backend"
    assert candidate.best_match_score == 80
    assert [s.job_role_id for s in candidate.job_role_scores] == ["backend", "designer"]
    assert Path(candidate.resume_path).exists()
    assert _stored_files(upload_dir) == [Path(candidate.resume_path)]


def test_missing_email_fails_and_file_is_deleted(pipeline, store, upload_dir):
    text = _resume("Jane Doe", "no email on file")
    summary = pipeline.process_batch([_txt("jane.txt", text)], OWNER)

    assert (summary.successful, summary.failed) == (0, 1)
    assert summary.results.failed[0].error == "Missing required fields: email"
    assert store.list_candidates(OWNER) == []
    assert _stored_files(upload_dir) == []


def test_empty_file_is_an_extraction_failure(pipeline, upload_dir):
    summary = pipeline.process_batch([_txt("empty.txt", "")], OWNER)

    assert (summary.total, summary.successful, summary.failed) == (1, 0, 1)
    assert summary.results.failed[0].filename == "empty.txt"
    assert summary.results.failed[0].error == "Could not extract text from resume"
    assert _stored_files(upload_dir) == []


def test_duplicate_email_across_files_in_one_batch(pipeline, store):
    files = [
        _txt("first.txt", _resume("Jane Doe", "jane@example.com")),
        _txt("second.txt", _resume("Jane Doe", "JANE@example.com")),
    ]
    summary = pipeline.process_batch(files, OWNER)

    assert [s.filename for s in summary.results.successful] == ["first.txt"]
    assert [f.filename for f in summary.results.failed] == ["second.txt"]
    assert "already exists" in summary.results.failed[0].error
    assert len(store.list_candidates(OWNER)) == 1


def test_duplicate_against_earlier_batch(pipeline):
    pipeline.process_batch([_txt("a.txt", _resume("Jane Doe", "jane@example.com"))], OWNER)
    summary = pipeline.process_batch([_txt("b.txt", _resume("Jane Doe", "jane@example.com"))], OWNER)
    assert summary.failed == 1


def test_same_email_for_another_owner_is_not_a_duplicate(pipeline, store):
    pipeline.process_batch([_txt("a.txt", _resume("Jane Doe", "jane@example.com"))], OWNER)
    summary = pipeline.process_batch([_txt("a.txt", _resume("Jane Doe", "jane@example.com"))], "user-2")

    assert summary.successful == 1
    [candidate] = store.list_candidates("user-2")
    # user-2 has no roles
    assert candidate.job_role_scores == []
    assert candidate.best_match_role_id is None


def test_multi_resume_file_shares_stored_path(pipeline, store, upload_dir):
    text = "\n\n".join([
        _resume("Jane Doe", "jane@example.com"),
        _resume("John Roe", "john@example.org", skills="Figma, Photoshop"),
        _resume("Jane Doe", "jane@example.com"),
    ])
    summary = pipeline.process_batch([_txt("batch.txt", text)], OWNER)

    assert (summary.total, summary.successful, summary.failed) == (3, 2, 1)
    assert summary.results.failed[0].chunk == 3
    candidates = store.list_candidates(OWNER)
    assert {c.resume_path for c in candidates} == {str(p) for p in _stored_files(upload_dir)}
    assert len(_stored_files(upload_dir)) == 1
    john = next(c for c in candidates if c.email == "john@example.org")
    assert john.best_match_role_id == "designer"


def test_bad_file_does_not_abort_batch(pipeline):
    files = [
        UploadedResume(content=b"\xd0\xcf\x11\xe0 binary word file", extension="doc", filename="old.doc"),
        UploadedResume(content=b"whatever", extension="rtf", filename="notes.rtf"),
        _txt("jane.txt", _resume("Jane Doe", "jane@example.com")),
    ]
    summary = pipeline.process_batch(files, OWNER)

    assert (summary.total, summary.successful, summary.failed) == (3, 1, 2)
    errors = {f.filename: f.error for f in summary.results.failed}
    assert "not fully supported" in errors["old.doc"]
    assert errors["notes.rtf"].startswith("Unsupported file format")


def test_inactive_roles_are_not_scored(store, pipeline):
    role = store.get_job_role(OWNER, "designer")
    store.save_job_role(role.model_copy(update={"is_active": False}))

    pipeline.process_batch([_txt("jane.txt", _resume("Jane Doe", "jane@example.com"))], OWNER)
    [candidate] = store.list_candidates(OWNER)
    assert [s.job_role_id for s in candidate.job_role_scores] == ["backend"]


def test_storage_failure_is_reported_per_item(store, upload_dir):
    class FailingStore(CandidateStore):
        def add_candidate(self, record):
            raise StorageError("database unavailable")

    failing = FailingStore()
    pipeline = ResumePipeline(failing, UploadStore(upload_dir), settings=Settings(UPLOAD_DIR=str(upload_dir)))
    summary = pipeline.process_batch(
        [
            _txt("a.txt", _resume("Jane Doe", "jane@example.com")),
            _txt("b.txt", _resume("John Roe", "john@example.org")),
        ],
        OWNER,
    )

    assert summary.failed == 2
    assert all(f.error == "database unavailable" for f in summary.results.failed)
    assert _stored_files(upload_dir) == []


def test_rescore_after_role_change(pipeline, store):
    pipeline.process_batch([_txt("jane.txt", _resume("Jane Doe", "jane@example.com"))], OWNER)
    store.save_job_role(JobRoleDefinition(
        id="data", owner_id=OWNER, title="Data Engineer", experience_level="senior",
        required_skills=[RequiredSkill(skill="Python", weight=1), RequiredSkill(skill="SQL", weight=1)],
    ))

    assert pipeline.rescore_candidates(OWNER) == 1
    [candidate] = store.list_candidates(OWNER)
    assert candidate.best_match_role_id == "data"
    assert candidate.best_match_score == 100
