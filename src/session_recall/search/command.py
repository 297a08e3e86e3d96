"""Search backend that shells out to the ``openclaw`` CLI.

Classes
-------
- CommandSearchBackend  — run ``<command> memory search ... --json``
"""
from __future__ import annotations

import logging
import subprocess
import threading
import time

from session_recall.models import RawHit
from session_recall.search.base import SearchBackend, SearchBackendError, SearchRequest
from session_recall.search.parsing import parse_search_response

logger = logging.getLogger(__name__)

DEFAULT_COMMAND: str = "openclaw"
DEFAULT_TIMEOUT_SECONDS: float = 10.0
DEFAULT_MAX_OUTPUT_BYTES: int = 1024 * 1024

_READ_CHUNK_BYTES: int = 64 * 1024


class CommandSearchBackend(SearchBackend):
    """Run the memory search command as a subprocess.

    The query is passed as its own argv element, so no shell quoting is
    involved.  Stderr is discarded because the command prints plugin
    loading messages there.  The child is killed as soon as its output
    exceeds ``max_output_bytes`` or ``timeout_seconds`` elapses.

    Parameters
    ----------
    command:
        Executable to run.  Default: ``"openclaw"``.
    timeout_seconds:
        Wall-clock limit for one search.  Default: 10.
    max_output_bytes:
        Largest stdout accepted, in bytes.  Default: 1 MiB.
    """

    def __init__(
        self,
        command: str = DEFAULT_COMMAND,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
    ) -> None:
        self.command = command
        self.timeout_seconds = timeout_seconds
        self.max_output_bytes = max_output_bytes

    def build_argv(self, request: SearchRequest) -> list[str]:
        """Return the argument vector for ``request``."""
        return [
            self.command,
            "memory",
            "search",
            request.query,
            "--agent",
            request.agent_id,
            "--max-results",
            str(request.max_results),
            "--min-score",
            str(request.min_score),
            "--json",
        ]

    def search(self, request: SearchRequest) -> list[RawHit]:
        argv = self.build_argv(request)
        deadline = time.monotonic() + self.timeout_seconds
        try:
            process = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise SearchBackendError(f"{self.command} search could not start: {exc}") from exc

        try:
            stdout = self._read_capped(process, deadline)
            returncode = process.wait(timeout=max(0.0, deadline - time.monotonic()))
        except subprocess.TimeoutExpired as exc:
            raise SearchBackendError(
                f"{self.command} search timed out after {self.timeout_seconds}s"
            ) from exc
        finally:
            if process.poll() is None:
                process.kill()
            process.wait()
            process.stdout.close()

        if returncode != 0:
            raise SearchBackendError(f"{self.command} search exited with status {returncode}")

        output = stdout.decode("utf-8", errors="replace")
        hits = parse_search_response(output)
        logger.debug("CommandSearchBackend: %d hits for agent %r", len(hits), request.agent_id)
        return hits

    def _read_capped(self, process: subprocess.Popen[bytes], deadline: float) -> bytes:
        """Drain ``process`` stdout until EOF, the byte cap, or ``deadline``.

        Reading happens on a helper thread so the deadline holds even while
        the child is silent.  The caller kills the child on any exception.

        Raises
        ------
        subprocess.TimeoutExpired
            If stdout is still open at ``deadline``.
        SearchBackendError
            If more than ``max_output_bytes`` were written.
        """
        chunks: list[bytes] = []
        overflowed = threading.Event()

        def drain() -> None:
            size = 0
            while True:
                try:
                    chunk = process.stdout.read1(_READ_CHUNK_BYTES)
                except (OSError, ValueError):
                    return
                if not chunk:
                    return
                chunks.append(chunk)
                size += len(chunk)
                if size > self.max_output_bytes:
                    overflowed.set()
                    return

        reader = threading.Thread(target=drain, name="session-recall-search-output", daemon=True)
        reader.start()
        reader.join(max(0.0, deadline - time.monotonic()))

        if reader.is_alive():
            raise subprocess.TimeoutExpired(self.command, self.timeout_seconds)
        if overflowed.is_set():
            raise SearchBackendError(
                f"{self.command} search output exceeded {self.max_output_bytes} bytes"
            )
        return b"".join(chunks)

    def __repr__(self) -> str:
        return (
            f"CommandSearchBackend(command={self.command!r}, "
            f"timeout_seconds={self.timeout_seconds})"
        )
