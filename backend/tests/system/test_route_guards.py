import pytest

from tests.helpers import create_user, login

PROTECTED = [
    ("POST", "/api/v1/news"),
    ("PUT", "/api/v1/news/1"),
    ("DELETE", "/api/v1/news/1"),
    ("POST", "/api/v1/community-arts"),
    ("PUT", "/api/v1/community-arts/1"),
    ("DELETE", "/api/v1/community-arts/1"),
    ("POST", "/api/v1/news-categories"),
    ("PUT", "/api/v1/news-categories/1"),
    ("DELETE", "/api/v1/news-categories/1"),
    ("POST", "/api/v1/art-categories"),
    ("PUT", "/api/v1/art-categories/1"),
    ("DELETE", "/api/v1/art-categories/1"),
    ("POST", "/api/v1/upload/community-art"),
]

ADMIN_ONLY = [
    ("GET", "/api/v1/users"),
    ("POST", "/api/v1/users"),
    ("GET", "/api/v1/users/1"),
    ("PUT", "/api/v1/users/1"),
    ("DELETE", "/api/v1/users/1"),
    ("PUT", "/api/v1/youtube-video"),
    ("GET", "/api/v1/admin/asset-cleanup-failures"),
]


def _call(client, method, url, headers=None):
    body = {} if method in ("POST", "PUT") else None
    return client.request(method, url, json=body, headers=headers)


@pytest.mark.parametrize("method,url", PROTECTED + ADMIN_ONLY)
def test_requires_token(client, method, url):
    r = _call(client, method, url)
    assert r.status_code == 401
    assert r.json() == {"error": "Access token required"}


@pytest.mark.parametrize("method,url", ADMIN_ONLY)
def test_editors_are_forbidden(client, admin_headers, method, url):
    create_user(client, admin_headers, "ed")
    editor = login(client, "ed", "pw-123456")

    r = _call(client, method, url, headers=editor)
    assert r.status_code == 403
    assert r.json() == {"error": "Access denied. Admin role required."}
