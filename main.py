"""Storyloom — dev launcher. Starts the API server in watch mode."""

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = os.getenv("PORT", "13013")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def main():
    parser = argparse.ArgumentParser(description="Storyloom dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--demo", action="store_true",
                        help="Clean and create demo story data")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL.upper())

    if args.demo:
        from storyloom.demo import create_demo_data
        from storyloom.storage import Storage
        create_demo_data(Storage(args.data_dir or ROOT / "data"))

    # Build env for the server process so it picks up the same data dir
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())

    print(f"Starting backend on http://{HOST}:{PORT} ...")
    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "storyloom.app:create_app", "--factory",
         "--reload", "--host", HOST, "--port", PORT, "--log-level", LOG_LEVEL.lower()],
        cwd=ROOT, env=env,
    )
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        proc.wait()


if __name__ == "__main__":
    main()
