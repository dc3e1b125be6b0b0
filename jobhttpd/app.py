"""Entry point: configure the job manager and routes, then serve."""

import argparse
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from jobhttpd.jobs.manager import JobManager
from jobhttpd.web import routes_command, routes_jobs
from jobhttpd.web.handler import Dispatcher
from jobhttpd.web.server import HttpServer, ServerConfig


def build_routes(job_manager: JobManager) -> Dispatcher:
    """Return a dispatcher holding every command and job route."""
    builder = Dispatcher.builder()
    builder = routes_command.register(builder)
    builder = routes_jobs.register(builder, job_manager)
    return builder.build()


def _env_count(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is not None and raw.isascii() and raw.isdigit():
        return int(raw)
    return default


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the server as configured by the environment (and a ``.env`` file)."""
    argparse.ArgumentParser(
        prog="jobhttpd",
        description="HTTP/1.0 server with CPU and IO job pools; configured by environment.",
    ).parse_args(argv)

    load_dotenv()

    cfg = ServerConfig(
        bind_addr=os.environ.get("BIND_ADDRESS", "127.0.0.1:8080"),
        max_connections=_env_count("MAX_CONNECTIONS", 64),
        rate_limit_per_sec=_env_count("RATE_LIMIT_PER_SEC", 200),
    )
    job_manager = JobManager(_env_count("CPU_WORKERS", 4), _env_count("IO_WORKERS", 2))
    server = HttpServer(cfg, build_routes(job_manager))

    try:
        server.run()
    except (OSError, ValueError) as exc:
        print(f"Server encountered a fatal error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())