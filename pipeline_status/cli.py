"""
Command line entry points for the check, in and out scripts.

Each script reads one JSON request from stdin and writes one JSON response
to stdout. Failures are reported on stderr with a non-zero exit status and
nothing is written to stdout.
"""

import argparse
import json
import sys
import tempfile
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence, TextIO

import structlog

from .config.defaults import get_default_config
from .errors import ResourceError
from .logging.config import configure_logging
from .protocol.commands import run_check, run_in, run_out
from .protocol.environment import identity_from_env
from .protocol.models import CheckRequest, InRequest, OutRequest

logger = structlog.get_logger(__name__)


class CommandFailed(Exception):
    """Raised to abort a command after its failure has been reported."""


def _fatal(doing: str, err: Exception, stderr: TextIO) -> CommandFailed:
    print(f"error {doing}: {err}", file=stderr)
    return CommandFailed(doing)


def _read_request(stdin: TextIO, parse: Callable[[Any], Any], stderr: TextIO) -> Any:
    try:
        raw = json.load(stdin)
        return parse(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, ResourceError) as e:
        raise _fatal("reading request", e, stderr) from e


def _dump_request(request: Any, prefix: str) -> None:
    """Write the decoded request to a temp file for debugging; credentials are masked."""
    payload = {
        "source": request.source.redacted(),
        "request": type(request).__name__,
    }
    version = getattr(request, "version", None)
    if version is not None:
        payload["version"] = version.to_dict()
    action = getattr(request, "action", None)
    if action is not None:
        payload["action"] = action.value

    try:
        with tempfile.NamedTemporaryFile(
            "w", prefix=prefix, suffix=".json", delete=False
        ) as handle:
            json.dump(payload, handle, default=str)
        logger.debug("Wrote debug request dump", path=handle.name)
    except OSError as e:
        logger.warning("Error writing debug output", error=str(e))


def _prepare(request: Any, dump_prefix: str) -> None:
    configure_logging(level="DEBUG" if request.source.is_debug else "INFO")
    if request.source.is_debug:
        _dump_request(request, dump_prefix)


def _emit(response: Any, stdout: TextIO) -> None:
    json.dump(response, stdout)
    stdout.write("\n")
    stdout.flush()


def _run(body: Callable[[], None]) -> int:
    try:
        body()
    except CommandFailed:
        return 1
    return 0


def check_main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    env: Optional[Mapping[str, str]] = None
) -> int:
    """Entry point of the ``check`` script."""
    argparse.ArgumentParser(description="Check for new pipeline status versions").parse_args(argv)

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    def body() -> None:
        request = _read_request(stdin, CheckRequest.from_dict, stderr)
        _prepare(request, get_default_config().debug.check_prefix)
        try:
            response = run_check(request, identity_from_env(env))
        except ResourceError as e:
            raise _fatal("checking for new versions", e, stderr) from e
        _emit(response, stdout)

    return _run(body)


def in_main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    env: Optional[Mapping[str, str]] = None
) -> int:
    """Entry point of the ``in`` script: ``in <destination>``."""
    parser = argparse.ArgumentParser(description="Fetch the pipeline status into a directory")
    parser.add_argument("destination", help="Directory to write the status file into")
    args = parser.parse_args(argv)

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    def body() -> None:
        request = _read_request(stdin, InRequest.from_dict, stderr)
        _prepare(request, get_default_config().debug.in_prefix)
        try:
            response = run_in(request, Path(args.destination), identity_from_env(env))
        except OSError as e:
            raise _fatal("writing status", e, stderr) from e
        except ResourceError as e:
            raise _fatal("fetching status", e, stderr) from e
        _emit(response, stdout)

    return _run(body)


def out_main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    env: Optional[Mapping[str, str]] = None
) -> int:
    """Entry point of the ``out`` script: ``out <source-directory>``."""
    parser = argparse.ArgumentParser(description="Start, finish or fail a pipeline build")
    parser.add_argument("source_dir", help="Directory containing the build's inputs")
    parser.parse_args(argv)

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    def body() -> None:
        request = _read_request(stdin, OutRequest.from_dict, stderr)
        _prepare(request, get_default_config().debug.out_prefix)
        try:
            response = run_out(request, identity_from_env(env))
        except ResourceError as e:
            raise _fatal(f"{request.action.value}ing pipeline", e, stderr) from e
        _emit(response, stdout)

    return _run(body)
