"""
Start the backend locally.

Usage:
    python scripts/run_local.py
    python scripts/run_local.py --port 5050 --host 127.0.0.1 --env production

Flags are handed to the server as the PORT / HOST / APP_ENV environment
variables it already reads; anything not given falls through to .env.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
BACKEND_ENTRYPOINT = REPO_ROOT / "backend" / "server.py"


def build_env(host: str | None, port: int | None, app_env: str | None, base: dict | None = None) -> dict:
    env = dict(os.environ if base is None else base)
    if host:
        env["HOST"] = host
    if port is not None:
        env["PORT"] = str(port)
    if app_env:
        env["APP_ENV"] = app_env
    return env


def run_local(host: str | None = None, port: int | None = None, app_env: str | None = None) -> int:
    if not BACKEND_ENTRYPOINT.is_file():
        print(
            f"[run-local] ERROR: backend entrypoint missing: {BACKEND_ENTRYPOINT}",
            file=sys.stderr,
            flush=True,
        )
        return 1

    env = build_env(host, port, app_env)
    print(
        f"[run-local] Starting backend on {env.get('HOST', '0.0.0.0')}:{env.get('PORT', '5000')}...",
        flush=True,
    )
    try:
        proc = subprocess.run([sys.executable, str(BACKEND_ENTRYPOINT)], cwd=str(REPO_ROOT), env=env)
        return proc.returncode
    except KeyboardInterrupt:
        print("\n[run-local] Stopped by user.", flush=True)
        return 130


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the backend API locally.")
    parser.add_argument("--host", help="interface to bind (sets HOST)")
    parser.add_argument("--port", type=int, help="port to listen on (sets PORT)")
    parser.add_argument("--env", dest="app_env", help="environment name (sets APP_ENV)")
    args = parser.parse_args(argv)
    return run_local(args.host, args.port, args.app_env)


if __name__ == "__main__":
    raise SystemExit(main())
