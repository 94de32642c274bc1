"""
Storage backends for uploaded community-art images.

Both backends take bare filenames; the caller owns the mapping between the
path stored in the database (``assets/community_art/<filename>``) and the
filename. The active backend is picked once at startup by `build_storage`.
"""

from __future__ import annotations

import ftplib
import logging
import posixpath
from pathlib import Path
from typing import Callable, Protocol

from promotheans_api.core.config import Settings
from promotheans_api.core.errors import StorageError

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    """Operations the upload pipeline needs from an asset store."""

    name: str

    def save(self, filename: str, data: bytes) -> None:
        ...

    def delete(self, filename: str) -> bool:
        """Remove the file. Returns False when it was already gone."""
        ...

    def locate(self, filename: str) -> str:
        ...

    def ensure_root(self) -> None:
        ...


class LocalStorage:
    name = "local"

    def __init__(self, root: str | Path):
        self.root = Path(root).expanduser().resolve()

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _abs(self, filename: str) -> Path:
        p = (self.root / posixpath.basename(filename)).resolve()
        if p.parent != self.root:
            raise PermissionError(f"Access denied: {filename}")
        return p

    def save(self, filename: str, data: bytes) -> None:
        self.ensure_root()
        dest = self._abs(filename)
        dest.write_bytes(data)
        logger.info("Stored image locally: %s", dest)

    def delete(self, filename: str) -> bool:
        p = self._abs(filename)
        if not p.exists():
            logger.info("Image file not found: %s", p)
            return False
        p.unlink()
        logger.info("Deleted image: %s", p)
        return True

    def locate(self, filename: str) -> str:
        return str(self._abs(filename))


class FtpMirrorStorage:
    """Writes to local disk, copies the file to an FTP host, then drops the local copy.

    When the remote copy fails the local file is kept so the failed upload can
    be inspected, and a `StorageError` is raised.
    """

    name = "FTP"

    def __init__(
        self,
        local: LocalStorage,
        host: str,
        user: str,
        password: str,
        port: int = 21,
        secure: bool = False,
        timeout: int = 60,
        remote_dir: str = "assets/community_art",
        ftp_factory: Callable[[], ftplib.FTP] | None = None,
    ):
        self.local = local
        self.host = host
        self.user = user
        self.password = password
        self.port = port
        self.secure = secure
        self.timeout = timeout
        self.remote_dir = remote_dir.strip("/")
        self._ftp_factory = ftp_factory or (ftplib.FTP_TLS if secure else ftplib.FTP)

    def ensure_root(self) -> None:
        self.local.ensure_root()

    def _connect(self) -> ftplib.FTP:
        ftp = self._ftp_factory()
        logger.debug("[FTP] connect %s:%s secure=%s user=%s", self.host, self.port, self.secure, self.user)
        try:
            ftp.connect(self.host, self.port, timeout=self.timeout)
            ftp.login(self.user, self.password)
            if self.secure and isinstance(ftp, ftplib.FTP_TLS):
                ftp.prot_p()
        except Exception:
            ftp.close()
            raise
        return ftp

    def _ensure_remote_dir(self, ftp: ftplib.FTP) -> None:
        for part in self.remote_dir.split("/"):
            if not part:
                continue
            try:
                ftp.mkd(part)
            except ftplib.error_perm:
                pass
            ftp.cwd(part)

    def _upload(self, local_path: str, filename: str) -> None:
        ftp = self._connect()
        try:
            self._ensure_remote_dir(ftp)
            with open(local_path, "rb") as fh:
                ftp.storbinary(f"STOR {filename}", fh)
            logger.info("Uploaded file via FTP: %s", self.locate(filename))
        finally:
            ftp.close()

    def save(self, filename: str, data: bytes) -> None:
        self.local.save(filename, data)
        local_path = self.local.locate(filename)
        try:
            self._upload(local_path, filename)
        except Exception as e:
            logger.error("FTP upload failed, keeping local file %s: %s", local_path, e)
            raise StorageError(f"Failed to upload file to server via FTP: {e}") from e
        self.local.delete(filename)
        logger.info("Local temp file deleted after FTP upload")

    def delete(self, filename: str) -> bool:
        ftp = self._connect()
        try:
            if self.remote_dir:
                ftp.cwd(self.remote_dir)
            ftp.delete(posixpath.basename(filename))
        except ftplib.error_perm as e:
            if str(e).startswith("550"):
                logger.info("File not found on FTP (may already be deleted): %s", self.locate(filename))
                return False
            raise
        finally:
            ftp.close()
        logger.info("Deleted file via FTP: %s", self.locate(filename))
        return True

    def locate(self, filename: str) -> str:
        name = posixpath.basename(filename)
        return f"{self.remote_dir}/{name}" if self.remote_dir else name


def build_storage(settings: Settings) -> StorageBackend:
    local = LocalStorage(settings.upload_dir)
    if not settings.ftp_enabled:
        return local
    return FtpMirrorStorage(
        local,
        host=settings.ftp_host,
        user=settings.ftp_user,
        password=settings.ftp_password,
        port=settings.ftp_port,
        secure=settings.ftp_secure,
        timeout=settings.ftp_timeout,
        remote_dir=settings.ftp_remote_dir,
    )
