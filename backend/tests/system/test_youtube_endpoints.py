from tests.helpers import create_user, login


def test_default_video_is_seeded(client):
    r = client.get("/api/v1/youtube-video")
    assert r.status_code == 200
    assert r.json()["id"] == 1
    assert r.json()["video_id"] == "zlMFsDJNneE"


def test_update_requires_admin(client, admin_headers):
    create_user(client, admin_headers, "ed")
    editor = login(client, "ed", "pw-123456")

    r = client.put("/api/v1/youtube-video", json={"video_url": "https://youtu.be/dQw4w9WgXcQ"}, headers=editor)
    assert r.status_code == 403


def test_update_rejects_invalid_urls(client, admin_headers):
    r = client.put("/api/v1/youtube-video", json={}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Video URL is required"}

    r = client.put("/api/v1/youtube-video", json={"video_url": "https://vimeo.com/1"}, headers=admin_headers)
    assert r.status_code == 400


def test_update_extracts_video_id(client, admin_headers):
    url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10s"
    r = client.put("/api/v1/youtube-video", json={"video_url": url}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["video_id"] == "dQw4w9WgXcQ"
    assert r.json()["message"] == "YouTube video updated successfully"

    r = client.get("/api/v1/youtube-video")
    assert r.json()["video_id"] == "dQw4w9WgXcQ"
    assert r.json()["video_url"] == url
