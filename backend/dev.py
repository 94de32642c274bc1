import platform
import subprocess
import sys
from pathlib import Path

BACKEND = Path(__file__).resolve().parent
PROJECT = BACKEND.parent  # holds pyproject.toml
VENV_DIR = PROJECT / ".venv"

COMMANDS = {
    "setup": "create .venv and pip install -e .[test]",
    "migrate": "alembic upgrade head",
    "seed": "create or promote the admin account",
    "test": "run the pytest suite",
    "run": "start uvicorn with --reload",
    "all": "setup + migrate + run",
}


def banner(msg: str) -> None:
    line = "=" * 60
    print(f"\n{line}\n{msg}\n{line}")


def die(msg: str, code: int = 1) -> None:
    print(f"error: {msg}")
    raise SystemExit(code)


def venv_python() -> str:
    if platform.system() == "Windows":
        return str(VENV_DIR / "Scripts" / "python.exe")
    return str(VENV_DIR / "bin" / "python")


def run(*args: str, cwd: Path = BACKEND) -> None:
    cmd = [venv_python(), *args]
    print(">", " ".join(cmd))
    subprocess.check_call(cmd, cwd=str(cwd))


def setup() -> None:
    if not Path(venv_python()).exists():
        banner(f"Creating virtual environment in {VENV_DIR}")
        subprocess.check_call([sys.executable, "-m", "venv", str(VENV_DIR)])
    banner("Installing promotheans-api with the test extra")
    run("-m", "pip", "install", "--upgrade", "pip")
    run("-m", "pip", "install", "-e", ".[test]", cwd=PROJECT)


def migrate() -> None:
    banner("alembic upgrade head (uses DATABASE_URL_SYNC)")
    run("-m", "alembic", "upgrade", "head")


def seed() -> None:
    banner("Ensuring the admin account exists")
    run("seeding/seed_admin.py", *sys.argv[2:])


def test() -> None:
    run("-m", "pytest", *sys.argv[2:], cwd=PROJECT)


def serve() -> None:
    banner("Promotheans API on http://127.0.0.1:8000/api/v1 (docs at /docs)")
    # blocks until interrupted
    run("-m", "uvicorn", "promotheans_api.main:app", "--reload", "--port", "8000")


def usage() -> None:
    print("\nCommands:")
    for name, help_text in COMMANDS.items():
        print(f"  python dev.py {name:<8} # {help_text}")


def main() -> None:
    cmd = sys.argv[1].lower().strip() if len(sys.argv) > 1 else ""
    if cmd not in COMMANDS:
        usage()
        die(f"Unknown command: {cmd}" if cmd else "No command given")

    if cmd != "setup" and cmd != "all" and not Path(venv_python()).exists():
        die("No virtual environment yet. Run `python dev.py setup` first.")

    if cmd in {"setup", "all"}:
        setup()
    if cmd in {"migrate", "all"}:
        migrate()
    if cmd == "seed":
        seed()
    if cmd == "test":
        test()
    if cmd in {"run", "all"}:
        serve()


if __name__ == "__main__":
    main()
