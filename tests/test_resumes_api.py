import pytest
from sqlalchemy.exc import OperationalError

from app.services import resume_service
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

def test_upload_pdf(client, alice, upload_resume, storage):
    response = upload_resume(alice)
    assert response.status_code == 201
    data = response.json()
    assert data["user_id"] == alice.id
    assert data["title"] == "jane_doe_cv"
    assert data["file_name"] == "jane_doe_cv.pdf"
    assert data["file_size"] == len(b"%PDF-1.4 fake resume")
    assert data["content_text"] is None

    owner, stored_name = data["file_path"].split("/")
    assert owner == alice.id
    assert stored_name.endswith(".pdf")
    assert storage.download(alice.id, data["file_path"]) == b"%PDF-1.4 fake resume"

def test_upload_docx(client, alice, upload_resume):
    response = upload_resume(alice, filename="resume.final.docx", content=b"PK docx", content_type=DOCX_TYPE)
    assert response.status_code == 201
    assert response.json()["title"] == "resume.final"
    assert response.json()["file_path"].endswith(".docx")

def test_upload_rejects_wrong_type_before_storage(client, alice, upload_resume, storage, auth_headers):
    response = upload_resume(alice, filename="notes.txt", content=b"hello", content_type="text/plain")
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Please upload a PDF or DOCX file"}
    assert not storage.base_dir.exists()
    assert client.get("/api/resumes", headers=auth_headers(alice)).json() == []

def test_upload_rejects_oversize_before_storage(client, alice, upload_resume, storage):
    too_big = b"0" * (resume_service.MAX_FILE_SIZE + 1)
    response = upload_resume(alice, content=too_big)
    assert response.status_code == 400
    assert response.json()["error"] == "Please upload a file smaller than 5MB"
    assert not storage.base_dir.exists()

def test_upload_accepts_exactly_five_megabytes(client, alice, upload_resume):
    response = upload_resume(alice, content=b"0" * resume_service.MAX_FILE_SIZE)
    assert response.status_code == 201

def test_upload_requires_auth(client):
    response = client.post("/api/resumes", files={"file": ("cv.pdf", b"data", "application/pdf")})
    assert response.status_code == 401

def test_list_is_newest_first_and_scoped(client, alice, bob, upload_resume, auth_headers):
    upload_resume(alice, filename="first.pdf")
    upload_resume(alice, filename="second.pdf")
    upload_resume(bob, filename="bobs.pdf")

    titles = [r["title"] for r in client.get("/api/resumes", headers=auth_headers(alice)).json()]
    assert titles == ["second", "first"]

    bob_titles = [r["title"] for r in client.get("/api/resumes", headers=auth_headers(bob)).json()]
    assert bob_titles == ["bobs"]

def test_other_user_cannot_read_update_or_delete(client, alice, bob, upload_resume, auth_headers):
    resume_id = upload_resume(alice).json()["id"]

    assert client.get(f"/api/resumes/{resume_id}", headers=auth_headers(bob)).status_code == 404
    assert client.patch(f"/api/resumes/{resume_id}", json={"title": "hijacked"}, headers=auth_headers(bob)).status_code == 404
    assert client.delete(f"/api/resumes/{resume_id}", headers=auth_headers(bob)).status_code == 404
    assert client.get(f"/api/resumes/{resume_id}/file", headers=auth_headers(bob)).status_code == 404

    still_there = client.get(f"/api/resumes/{resume_id}", headers=auth_headers(alice))
    assert still_there.status_code == 200
    assert still_there.json()["title"] == "jane_doe_cv"

def test_update_title_and_text(client, alice, upload_resume, auth_headers):
    resume = upload_resume(alice).json()
    response = client.patch(
        f"/api/resumes/{resume['id']}",
        json={"title": "Jane - Backend", "content_text": "Python developer, 6 years"},
        headers=auth_headers(alice),
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Jane - Backend"
    assert response.json()["content_text"] == "Python developer, 6 years"
    assert response.json()["updated_at"] >= resume["updated_at"]

@pytest.mark.parametrize("title", [None, "", "   "])
def test_update_rejects_blank_title(client, alice, upload_resume, auth_headers, title):
    resume_id = upload_resume(alice).json()["id"]
    response = client.patch(f"/api/resumes/{resume_id}", json={"title": title}, headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Title cannot be empty"}
    assert client.get(f"/api/resumes/{resume_id}", headers=auth_headers(alice)).json()["title"] == "jane_doe_cv"

def test_update_text_only_keeps_title(client, alice, upload_resume, auth_headers):
    resume_id = upload_resume(alice).json()["id"]
    response = client.patch(f"/api/resumes/{resume_id}", json={"content_text": None}, headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.json()["title"] == "jane_doe_cv"

def test_download_file(client, alice, upload_resume, auth_headers):
    resume_id = upload_resume(alice).json()["id"]
    response = client.get(f"/api/resumes/{resume_id}/file", headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.content == b"%PDF-1.4 fake resume"
    assert response.headers["content-type"] == "application/pdf"

def test_delete_removes_row_and_file(client, alice, upload_resume, auth_headers, storage):
    resume = upload_resume(alice).json()
    response = client.delete(f"/api/resumes/{resume['id']}", headers=auth_headers(alice))
    assert response.status_code == 200
    assert client.get(f"/api/resumes/{resume['id']}", headers=auth_headers(alice)).status_code == 404
    assert not (storage.base_dir / resume["file_path"]).exists()

def test_object_key_format():
    assert resume_service.build_object_key("u1", "cv.final.pdf", timestamp_ms=1700000000000) == "u1/1700000000000.pdf"
    assert resume_service.build_object_key("u1", "README", timestamp_ms=5) == "u1/5.README"

def test_title_strips_last_extension_only():
    assert resume_service.title_from_filename("my.resume.docx") == "my.resume"
    assert resume_service.title_from_filename("resume") == "resume"

def test_failed_metadata_insert_keeps_blob(client, alice, upload_resume, storage, db_session, monkeypatch):
    rollbacks = []

    def failing_commit():
        raise OperationalError("INSERT INTO resumes", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", failing_commit)
    monkeypatch.setattr(db_session, "rollback", lambda: rollbacks.append(True))

    response = upload_resume(alice, content=b"%PDF-1.4 orphan")
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to save resume"}
    assert rollbacks == [True]

    stored = list((storage.base_dir / alice.id).iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == b"%PDF-1.4 orphan"
