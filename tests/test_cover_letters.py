"""
Integration tests for the cover letter endpoints.
"""
from covercraft.db.models.cover_letter import CoverLetter
from covercraft.db.models.profile import UserProfile


LETTER_FORM = {
    "title": "Backend Engineer at Acme",
    "content": "Dear Acme,\n\nI build reliable services.\n\nRegards,\nJane",
    "job_description": "Backend engineer at Acme",
    "company_name": "Acme",
    "position_title": "Backend Engineer",
}


def _save(client, headers, **overrides):
    response = client.post("/cover-letters", data={**LETTER_FORM, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_save_then_fetch_returns_same_fields(client, auth_headers):
    """Saving a letter then fetching it by id returns identical fields."""
    saved = _save(client, auth_headers)

    response = client.get(f"/cover-letters/{saved['id']}", headers=auth_headers)

    assert response.status_code == 200
    fetched = response.json()
    for field in ("title", "content", "company_name", "position_title", "job_description"):
        assert fetched[field] == LETTER_FORM[field]


def test_save_requires_title_and_content(client, auth_headers, db_session):
    response = client.post("/cover-letters", data={**LETTER_FORM, "title": ""}, headers=auth_headers)
    assert response.status_code == 400

    response = client.post("/cover-letters", data={**LETTER_FORM, "content": "  "}, headers=auth_headers)
    assert response.status_code == 400

    assert db_session.query(CoverLetter).count() == 0


def test_save_with_cv_caches_resume(client, auth_headers, db_session, test_user, cv_bucket):
    """An attached CV is stored in the bucket and cached on the profile."""
    response = client.post(
        "/cover-letters",
        data=LETTER_FORM,
        files={"cv_file": ("resume.txt", b"5 years Go, Python", "text/plain")},
        headers=auth_headers,
    )

    assert response.status_code == 201
    user_profile = db_session.query(UserProfile).filter(UserProfile.user_id == test_user.id).first()
    assert user_profile.cv_filename == "resume.txt"
    assert user_profile.cv_content == "5 years Go, Python"
    assert (cv_bucket / user_profile.cv_storage_key).read_bytes() == b"5 years Go, Python"


def test_save_keeps_letter_when_cv_cannot_be_read(client, auth_headers, db_session, test_user, fake_provider):
    """A cached CV skips parsing at generate, so a bad file is first read at save."""
    db_session.add(UserProfile(user_id=test_user.id, cv_filename="cv.txt", cv_content="Cached resume text"))
    db_session.commit()
    old_doc = ("old.doc", b"\xd0\xcf\x11\xe0 legacy word file", "application/msword")

    generated = client.post(
        "/cover-letters/generate",
        data={"job_description": "Backend engineer at Acme"},
        files={"cv_file": old_doc},
        headers=auth_headers,
    )
    assert generated.status_code == 200

    response = client.post("/cover-letters", data=LETTER_FORM, files={"cv_file": old_doc}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Cover letter saved, but the CV could not be stored."
    db_session.expire_all()
    assert db_session.query(CoverLetter).filter(CoverLetter.user_id == test_user.id).count() == 1
    user_profile = db_session.query(UserProfile).filter(UserProfile.user_id == test_user.id).first()
    assert user_profile.cv_content == "Cached resume text"


def test_list_is_newest_first(client, auth_headers):
    first = _save(client, auth_headers, title="First")
    second = _save(client, auth_headers, title="Second")
    third = _save(client, auth_headers, title="Third")

    response = client.get("/cover-letters", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert [letter["id"] for letter in body["cover_letters"]] == [third["id"], second["id"], first["id"]]


def test_delete_only_affects_owner(client, auth_headers, other_auth_headers):
    """Deleting removes the letter for its owner and leaves other owners alone."""
    mine = _save(client, auth_headers, title="Mine")
    theirs = _save(client, other_auth_headers, title="Theirs")

    response = client.delete(f"/cover-letters/{mine['id']}", headers=auth_headers)
    assert response.status_code == 204

    my_list = client.get("/cover-letters", headers=auth_headers).json()
    their_list = client.get("/cover-letters", headers=other_auth_headers).json()
    assert my_list["cover_letters"] == []
    assert [letter["id"] for letter in their_list["cover_letters"]] == [theirs["id"]]


def test_cannot_touch_another_users_letter(client, auth_headers, other_auth_headers):
    theirs = _save(client, other_auth_headers)

    assert client.get(f"/cover-letters/{theirs['id']}", headers=auth_headers).status_code == 404
    assert client.put(f"/cover-letters/{theirs['id']}", json={"content": "x"}, headers=auth_headers).status_code == 404
    assert client.delete(f"/cover-letters/{theirs['id']}", headers=auth_headers).status_code == 404

    still_there = client.get(f"/cover-letters/{theirs['id']}", headers=other_auth_headers)
    assert still_there.json()["content"] == LETTER_FORM["content"]


def test_update_content_in_place(client, auth_headers):
    saved = _save(client, auth_headers)

    response = client.put(f"/cover-letters/{saved['id']}", json={"content": "Edited body"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["content"] == "Edited body"
    assert response.json()["title"] == LETTER_FORM["title"]
    assert client.get(f"/cover-letters/{saved['id']}", headers=auth_headers).json()["content"] == "Edited body"


def test_requires_authentication(client):
    assert client.get("/cover-letters").status_code == 401
    assert client.get("/cover-letters", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_generate_with_uploaded_cv(client, auth_headers, fake_provider):
    fake_provider.content = "Dear Acme,..."

    response = client.post(
        "/cover-letters/generate",
        data={"job_description": "Backend engineer at Acme", "company_name": "Acme", "position_title": "Backend Engineer"},
        files={"cv_file": ("resume.txt", b"5 years Go, Python", "text/plain")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"content": "Dear Acme,...", "used_cached_cv": False}
    prompt = fake_provider.calls[0]["messages"][1]["content"]
    assert "CV/Resume Content: 5 years Go, Python" in prompt
    assert "- Name: Jane Doe" in prompt
    assert "- Email: jane@example.com" in prompt


def test_generate_prefers_cached_cv(client, auth_headers, db_session, test_user, fake_provider):
    db_session.add(UserProfile(user_id=test_user.id, cv_filename="cv.txt", cv_content="Cached resume text", phone_number="555-0100"))
    db_session.commit()

    response = client.post(
        "/cover-letters/generate",
        data={"job_description": "Backend engineer at Acme"},
        files={"cv_file": ("other.txt", b"Uploaded text", "text/plain")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["used_cached_cv"] is True
    prompt = fake_provider.calls[0]["messages"][1]["content"]
    assert "CV/Resume Content: Cached resume text" in prompt
    assert "- Phone: 555-0100" in prompt


def test_generate_rejects_missing_inputs_without_calling_model(client, auth_headers, fake_provider):
    no_jd = client.post(
        "/cover-letters/generate",
        data={"job_description": ""},
        files={"cv_file": ("resume.txt", b"text", "text/plain")},
        headers=auth_headers,
    )
    no_cv = client.post(
        "/cover-letters/generate",
        data={"job_description": "Backend engineer"},
        headers=auth_headers,
    )

    assert no_jd.status_code == 400
    assert no_cv.status_code == 400
    assert "job description" in no_cv.json()["detail"]
    assert fake_provider.calls == []


def test_generate_model_failure_is_500(client, auth_headers, fake_provider):
    fake_provider.error = RuntimeError("boom")

    response = client.post(
        "/cover-letters/generate",
        data={"job_description": "Backend engineer"},
        files={"cv_file": ("resume.txt", b"text", "text/plain")},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate cover letter. Please try again."


def test_dashboard_shows_six_most_recent(client, auth_headers):
    ids = [_save(client, auth_headers, title=f"Letter {i}")["id"] for i in range(8)]

    response = client.get("/dashboard", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "jane@example.com"
    assert body["full_name"] == "Jane Doe"
    assert body["total"] == 8
    assert [letter["id"] for letter in body["recent_cover_letters"]] == list(reversed(ids))[:6]
