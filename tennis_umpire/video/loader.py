"""
Recorded-match replay: decodes a match video into court-pipeline Frames.
"""
from __future__ import annotations
from typing import Iterator, Optional, Tuple
import logging
import cv2
import numpy as np

from ..models.frame import Frame, VideoMetadata

logger = logging.getLogger(__name__)

ReplayItem = Tuple[float, Frame, np.ndarray]


class VideoLoader:
    """
    Replays a recorded match one decoded frame at a time.

    Use as a context manager, or call `open()` / `close()` directly when
    the replay outlives a single block (e.g. a host UI scrubbing a file).
    """

    def __init__(self, path: str):
        self.path = path
        self._capture: Optional[cv2.VideoCapture] = None
        self._info: Optional[VideoMetadata] = None

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def open(self) -> VideoMetadata:
        if self._capture is None:
            capture = cv2.VideoCapture(self.path)
            if not capture.isOpened():
                capture.release()
                raise IOError(f"Cannot open match video: {self.path}")
            self._capture = capture
            self._info = VideoMetadata.from_capture(capture, self.path)
            logger.info("[Video] %s: %dx%d @ %.1f fps, %d frames",
                        self.path, self._info.width, self._info.height,
                        self._info.fps, self._info.total_frames)
        return self._info

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
        self._capture = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def __enter__(self) -> "VideoLoader":
        self.open()
        return self

    def __exit__(self, *_) -> None:
        self.close()

    # ── Replay ────────────────────────────────────────────────────────────────

    @property
    def metadata(self) -> VideoMetadata:
        if self._info is None:
            raise RuntimeError("VideoLoader not opened - call open() or use as context manager")
        return self._info

    def frames(self, max_frames: Optional[int] = None,
               start_s: float = 0.0) -> Iterator[ReplayItem]:
        """
        Yield (timestamp_s, frame, bgr_image) from `start_s` onwards.

        Timestamps are frame index / fps. The BGR image goes to the
        detector; the Frame is the RGB view the court pipeline consumes.
        """
        if self._capture is None:
            raise RuntimeError("VideoLoader not opened")
        fps = self._info.fps
        index = max(0, int(round(start_s * fps)))
        if index:
            self._capture.set(cv2.CAP_PROP_POS_FRAMES, index)

        yielded = 0
        while max_frames is None or yielded < max_frames:
            ok, image = self._capture.read()
            if not ok:
                break
            yield index / fps, Frame.from_bgr(image), image
            index += 1
            yielded += 1
