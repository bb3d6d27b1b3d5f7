"""Background output pumping for running analyzers."""

from __future__ import annotations

import codecs
import threading
from typing import Iterable

from qodana_cli.backends.base import OutputSink
from qodana_cli.utils.logging import get_logger

logger = get_logger("backends.stream")


class OutputPump:
    """Reads an output stream on a background thread.

    Every chunk is decoded, forwarded to the sink and kept, so the
    producer never blocks on a full pipe while the caller waits for
    the process to exit.

    Example:
        pump = OutputPump(iter(proc.stdout.readline, b""), console.print)
        pump.start()
        proc.wait()
        text = pump.join()
    """

    def __init__(self, chunks: Iterable[bytes | str], sink: OutputSink, name: str = "output") -> None:
        self._chunks = chunks
        self._sink = sink
        self._parts: list[str] = []
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._thread = threading.Thread(target=self._pump, name=f"qodana-{name}-pump", daemon=True)

    def _pump(self) -> None:
        try:
            for chunk in self._chunks:
                text = self._decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
                if not text:
                    continue
                self._parts.append(text)
                self._sink(text)
            tail = self._decoder.decode(b"", final=True)
            if tail:
                self._parts.append(tail)
                self._sink(tail)
        except (OSError, ValueError) as e:
            # The stream closes under us when the process is killed
            logger.debug(f"Output stream {self._thread.name} closed: {e}")

    def start(self) -> "OutputPump":
        self._thread.start()
        return self

    def join(self, timeout: float | None = None) -> str:
        """Wait for the stream to drain and return everything read."""
        self._thread.join(timeout)
        return "".join(self._parts)
