import ftplib
from contextlib import asynccontextmanager, contextmanager

from fastapi.testclient import TestClient

from promotheans_api.db.init_db import create_tables
from promotheans_api.db.session import get_engine, get_sessionmaker
from promotheans_api.main import create_app


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def login(client: TestClient, username: str, password: str) -> dict:
    resp = client.post("/api/v1/auth/verify-access", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return auth_header(resp.json()["token"])


def create_user(client: TestClient, headers: dict, username: str, role: str = "Editor", password: str = "pw-123456") -> dict:
    resp = client.post(
        "/api/v1/users",
        json={"username": username, "password": password, "user_role": role},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def news_payload(**overrides) -> dict:
    payload = {
        "date": "2024-03-05",
        "category": "Updates",
        "title": "Patch notes",
        "excerpt": "Balance changes and fixes.",
    }
    payload.update(overrides)
    return payload


@contextmanager
def make_client(settings, **overrides):
    """A client for an app built from `settings` with a few fields replaced."""
    app = create_app(settings.model_copy(update=overrides))
    with TestClient(app) as c:
        yield c


@asynccontextmanager
async def temp_database(path):
    engine = get_engine(f"sqlite+aiosqlite:///{path}")
    await create_tables(engine)
    try:
        yield get_sessionmaker(engine)
    finally:
        await engine.dispose()


class FakeFTPServer:
    """In-memory stand-in for a remote FTP host, keyed by full remote path."""

    def __init__(self, fail_store: bool = False, fail_login: bool = False):
        self.files: dict[str, bytes] = {}
        self.fail_store = fail_store
        self.fail_login = fail_login
        self.connections: list[tuple[str, int]] = []
        self.clients: list["FakeFTP"] = []

    def factory(self):
        client = FakeFTP(self)
        self.clients.append(client)
        return client


class FakeFTP:
    def __init__(self, server: FakeFTPServer):
        self.server = server
        self.cwd_parts: list[str] = []
        self.closed = False

    def connect(self, host, port, timeout=None):
        self.server.connections.append((host, port))

    def login(self, user, password):
        if self.server.fail_login:
            raise ftplib.error_perm("530 Login incorrect")
        return "230 Login successful"

    def mkd(self, name):
        raise ftplib.error_perm("550 Directory exists")

    def cwd(self, path):
        self.cwd_parts.extend(p for p in path.split("/") if p)

    def _key(self, name):
        return "/".join(self.cwd_parts + [name])

    def storbinary(self, cmd, fh):
        if self.server.fail_store:
            raise ftplib.error_temp("421 Service not available")
        self.server.files[self._key(cmd.split(" ", 1)[1])] = fh.read()

    def delete(self, name):
        key = self._key(name)
        if key not in self.server.files:
            raise ftplib.error_perm("550 No such file")
        del self.server.files[key]

    def close(self):
        self.closed = True
