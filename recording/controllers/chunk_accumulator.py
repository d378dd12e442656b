"""
Chunk Accumulator

Channel between a chunk recorder and its session. Recorders may deliver
from their own threads; chunks are queued in arrival order and only
assembled into an artifact when the session stops.
"""

import logging
import queue
from typing import List

from recording.models.recording_models import Artifact


class ChunkAccumulator:
    """
    Ordered, append-only buffer of media chunks.

    Zero-length chunks are discarded on arrival.

    Usage:
        chunks = ChunkAccumulator()
        recorder.on_data_available = chunks.put
        ...
        artifact = chunks.assemble("video/webm")
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._channel: "queue.Queue[bytes]" = queue.Queue()
        self._chunks: List[bytes] = []
        self.discarded_count = 0

    def put(self, chunk: bytes) -> None:
        """Accept one chunk from the recorder"""
        if not chunk:
            self.discarded_count += 1
            return
        self._channel.put(bytes(chunk))

    def drain(self) -> List[bytes]:
        """
        Move everything queued so far into the ordered chunk list.

        Returns:
            All chunks accumulated since the last clear()
        """
        while True:
            try:
                self._chunks.append(self._channel.get_nowait())
            except queue.Empty:
                break
        return list(self._chunks)

    def clear(self) -> None:
        """Drop every chunk (start of a new recording)"""
        self.drain()
        self._chunks.clear()
        self.discarded_count = 0

    def assemble(self, mime_type: str) -> Artifact:
        """
        Concatenate all chunks, in arrival order, into one artifact.

        Args:
            mime_type: Content type of the resulting blob
        """
        chunks = self.drain()
        artifact = Artifact(data=b"".join(chunks), mime_type=mime_type)
        self.logger.info(
            f"Assembled {len(chunks)} chunks into {artifact.size} bytes "
            f"({self.discarded_count} empty chunks discarded)",
        )
        return artifact

    @property
    def chunk_count(self) -> int:
        return len(self.drain())

    @property
    def byte_count(self) -> int:
        return sum(len(chunk) for chunk in self.drain())
