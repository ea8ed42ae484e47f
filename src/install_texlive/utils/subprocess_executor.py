"""Subprocess execution utilities with automatic logging."""

import asyncio
import subprocess
from collections import deque
from collections.abc import AsyncIterator
from typing import Any

from install_texlive.logger import get_logger

logger = get_logger(__name__)


def is_progress_line(line: str) -> bool:
    """
    Check if a line appears to be a progress update (e.g., contains control characters
    like \r, \b, or ANSI escape sequences).
    """
    return "\r" in line or "\b" in line or "\033[" in line


class SubprocessExecutor:
    """Executes subprocess commands with automatic logging."""

    @staticmethod
    async def run_streaming(
        *args: str,
        max_buffer_lines: int | None = 200,
    ) -> int:
        """
        Execute a subprocess, forwarding its output to the log as it arrives.

        Args:
            *args: Command arguments
            max_buffer_lines: Number of trailing output lines kept for the error
                log when the command fails. None keeps everything. Progress lines
                are deduplicated by overwriting the last progress line in the buffer.

        Returns:
            Exit status of the command. A non-zero status is returned, not raised.

        Raises:
            OSError: If the executable cannot be started
        """
        cmd_str = " ".join(args)
        logger.debug(f"Executing subprocess with streaming: {cmd_str}")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            logger.error(f"Subprocess execution failed: {cmd_str} - {e}")
            raise

        # Use deque for bounded buffer if max_buffer_lines is set, else list for unbounded
        output_lines: deque[str] | list[str]
        if max_buffer_lines is not None:
            output_lines = deque(maxlen=max_buffer_lines)
        else:
            output_lines = []
        try:
            async for line, _source in SubprocessExecutor.iter_lines(process=process):
                if is_progress_line(line):
                    if output_lines and is_progress_line(output_lines[-1]):
                        output_lines[-1] = line
                    else:
                        output_lines.append(line)
                else:
                    output_lines.append(line)
                logger.info(line)
        except subprocess.CalledProcessError as e:
            buffer_note = f" (last {max_buffer_lines} lines)" if max_buffer_lines is not None else ""
            logger.error(f"Subprocess failed with code {e.returncode}: {cmd_str}{buffer_note}")
            logger.debug(f"Error output{buffer_note}: " + "\n".join(output_lines))
            return e.returncode

        assert process.returncode is not None
        return process.returncode

    @staticmethod
    async def iter_lines(
        *args: str,
        process: asyncio.subprocess.Process | None = None,
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> AsyncIterator[tuple[str, str]]:
        """
        Async generator that yields (line, source) tuples from a subprocess in real-time.

        Yields:
            Tuple[line, source] where source is 'stdout' or 'stderr'.

        Notes:
            - A process started here has stderr merged into stdout, so all yields
              have source 'stdout'. A caller-provided process is read from both
              pipes it exposes.
            - If the subprocess exits with a non-zero code, a
              `subprocess.CalledProcessError` is raised after all lines are yielded.
        """
        # If caller provided a process, use it; otherwise create one from args.
        if process is None:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )

        # Use a sentinel to signal reader completion to avoid deadlocks
        sentinel = object()
        queue: asyncio.Queue[tuple[str, str] | object] = asyncio.Queue()

        async def _reader(stream: asyncio.StreamReader, source: str) -> None:
            try:
                async for raw in stream:
                    line = raw.decode(encoding, errors=errors).rstrip("\n\r")
                    await queue.put((line, source))
            except Exception as e:
                logger.error(f"Error reading from subprocess {source}: {e}")
            finally:
                await queue.put(sentinel)

        readers: list[asyncio.Task[Any]] = []
        if process.stdout:
            readers.append(asyncio.create_task(_reader(process.stdout, "stdout")))
        if process.stderr:
            readers.append(asyncio.create_task(_reader(process.stderr, "stderr")))

        active_readers = len(readers)

        try:
            while active_readers > 0:
                item = await queue.get()
                if item is sentinel:
                    active_readers -= 1
                else:
                    yield item  # type: ignore

            if readers:
                await asyncio.gather(*readers, return_exceptions=True)

            await process.wait()

            # If process failed, raise after streaming all output
            if process.returncode is not None and process.returncode != 0:
                proc_args = getattr(process, "args", args)
                raise subprocess.CalledProcessError(process.returncode, proc_args)

        finally:
            for t in readers:
                if not t.done():
                    t.cancel()
