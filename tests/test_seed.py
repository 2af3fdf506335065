from sqlmodel import select

from videoshare.db.models.users import User, UserRole
from videoshare.db.models.videos import Video
from videoshare.db.seed import seed_all


def test_seed_inserts_users_and_videos_once(session, client):
    seed_all(session)
    seed_all(session)  # deuxième passage : rien n'est dupliqué

    users = session.exec(select(User)).all()
    videos = session.exec(select(Video)).all()
    assert {u.email for u in users} == {"ann@example.com", "admin@example.com"}
    assert next(u for u in users if u.email == "admin@example.com").role == UserRole.admin
    assert len(videos) == 3

    feed = client.get("/api/videos").json()["videos"]
    assert len(feed) == 3
    assert all("user" in v for v in feed)


def test_seed_skips_videos_with_unknown_owner(session, tmp_path):
    seed_file = tmp_path / "seed.yaml"
    seed_file.write_text(
        "users:\n"
        "  - {key: ann, email: ann@example.com, password: pw-123456}\n"
        "videos:\n"
        "  - {title: a, description: d, video_url: u, thumbnail_url: t, owner_key: ann}\n"
        "  - {title: b, description: d, video_url: u, thumbnail_url: t, owner_key: ghost}\n",
        encoding="utf-8",
    )
    seed_all(session, seed_file)

    titles = [v.title for v in session.exec(select(Video)).all()]
    assert titles == ["a"]


def test_seed_skips_videos_without_owner(session, tmp_path):
    seed_file = tmp_path / "seed.yaml"
    seed_file.write_text(
        "users:\n"
        "  - {key: ann, email: ann@example.com, password: pw-123456}\n"
        "videos:\n"
        "  - {title: a, description: d, video_url: u, thumbnail_url: t, owner_key: ann}\n"
        "  - {title: b, description: d, video_url: u, thumbnail_url: t}\n",
        encoding="utf-8",
    )
    seed_all(session, seed_file)

    videos = session.exec(select(Video)).all()
    assert [v.title for v in videos] == ["a"]
    assert all(v.owner_id for v in videos)
