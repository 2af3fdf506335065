import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from videoshare.api.v1.dependencies import get_video_repository
from videoshare.db.models.videos import Video
from videoshare.db.repositories.videos import VideoRepository

REQUIRED = ["title", "description", "videoUrl", "thumbnailUrl", "userId"]


def _payload(user_id, **overrides):
    body = {
        "title": "My clip",
        "description": "A short vertical clip",
        "videoUrl": "https://cdn.example.com/clip.mp4",
        "thumbnailUrl": "https://cdn.example.com/clip.jpg",
        "userId": user_id,
    }
    body.update(overrides)
    return body


def _count_videos(session):
    session.expire_all()
    return len(session.exec(select(Video)).all())


def test_create_then_fetch(client, make_user, auth_headers):
    ann = make_user()
    r = client.post("/api/videos", json=_payload(ann.id), headers=auth_headers(ann))
    assert r.status_code == 201
    created = r.json()
    assert created["id"]
    assert created["createdAt"]
    assert created["updatedAt"]
    assert created["userId"] == ann.id
    # pas d'enrichissement sur la création
    assert "user" not in created

    fetched = client.get(f"/api/videos/{created['id']}").json()
    for key in ("title", "description", "videoUrl", "thumbnailUrl"):
        assert fetched[key] == created[key]
    assert fetched["user"]["name"] == "Ann"


def test_create_applies_defaults(client, make_user, auth_headers):
    ann = make_user()
    created = client.post("/api/videos", json=_payload(ann.id), headers=auth_headers(ann)).json()
    assert created["controls"] is True
    assert created["transformation"] == {"width": 1080, "height": 1920}
    assert created["views"] == 0
    assert created["likes"] == 0
    assert created["tags"] == []


def test_create_accepts_optional_fields(client, make_user, auth_headers):
    ann = make_user()
    payload = _payload(
        ann.id,
        title="  Trimmed  ",
        controls=False,
        tags=["fun", " ", "travel "],
        transformation={"quality": 80},
    )
    created = client.post("/api/videos", json=payload, headers=auth_headers(ann)).json()
    assert created["title"] == "Trimmed"
    assert created["controls"] is False
    assert created["tags"] == ["fun", "travel"]
    assert created["transformation"] == {"width": 1080, "height": 1920, "quality": 80}


def test_create_rejects_out_of_range_quality(client, make_user, auth_headers, session):
    ann = make_user()
    r = client.post(
        "/api/videos",
        json=_payload(ann.id, transformation={"quality": 101}),
        headers=auth_headers(ann),
    )
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid fields"
    assert "transformation.quality" in body["fields"]
    assert _count_videos(session) == 0


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"title": 123}, "title"),
        ({"tags": "not-a-list"}, "tags"),
        ({"controls": "maybe"}, "controls"),
    ],
)
def test_create_schema_errors_are_400(client, make_user, auth_headers, session, overrides, field):
    ann = make_user()
    r = client.post("/api/videos", json=_payload(ann.id, **overrides), headers=auth_headers(ann))
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid fields"
    assert field in body["fields"]
    assert _count_videos(session) == 0


def test_create_without_token_is_401(client, make_user, session):
    ann = make_user()
    r = client.post("/api/videos", json=_payload(ann.id))
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}
    assert _count_videos(session) == 0


def test_create_with_garbage_token_is_401(client, make_user, session):
    ann = make_user()
    r = client.post("/api/videos", json=_payload(ann.id), headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401
    assert _count_videos(session) == 0


@pytest.mark.parametrize("missing", REQUIRED)
@pytest.mark.parametrize("mode", ["absent", "empty", "blank"])
def test_create_missing_field_is_400(client, make_user, auth_headers, session, missing, mode):
    ann = make_user()
    payload = _payload(ann.id)
    if mode == "absent":
        del payload[missing]
    elif mode == "empty":
        payload[missing] = ""
    else:
        payload[missing] = "   "

    r = client.post("/api/videos", json=payload, headers=auth_headers(ann))
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Missing required fields"
    assert body["required"] == REQUIRED
    assert body["received"][missing] is False
    assert all(ok for name, ok in body["received"].items() if name != missing)
    assert _count_videos(session) == 0


def test_create_for_another_user_is_403(client, make_user, auth_headers, session):
    ann = make_user()
    bob = make_user(name="Bob")
    r = client.post("/api/videos", json=_payload(bob.id), headers=auth_headers(ann))
    assert r.status_code == 403
    assert r.json()["error"] == "Unauthorized: Cannot upload for another user"
    assert _count_videos(session) == 0


def test_create_too_long_title_is_400(client, make_user, auth_headers, session):
    ann = make_user()
    r = client.post(
        "/api/videos",
        json=_payload(ann.id, title="x" * 101),
        headers=auth_headers(ann),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid fields"
    assert "title" in r.json()["fields"]
    assert _count_videos(session) == 0


def test_create_store_failure_is_500(app, client, session, make_user, auth_headers):
    ann = make_user()

    class BrokenVideoRepository(VideoRepository):
        def create(self, *, commit=True, **fields):
            raise OperationalError("INSERT video", {}, Exception("database is locked"))

    app.dependency_overrides[get_video_repository] = lambda: BrokenVideoRepository(session)

    r = client.post("/api/videos", json=_payload(ann.id), headers=auth_headers(ann))
    assert r.status_code == 500
    assert r.json()["error"] == "Failed to create video"
    assert "database is locked" in r.json()["details"]
