"""I/O handling for video frames and masks."""

import cv2
import numpy as np
from pathlib import Path
from typing import Iterator, Optional, Tuple


class VideoReader:
    """Read video frames."""
    
    def __init__(self, video_path: str):
        self.video_path = video_path
        self.cap = cv2.VideoCapture(str(video_path))
        if not self.cap.isOpened():
            raise IOError(f"Cannot open video: {video_path}")
        self.fps = self.cap.get(cv2.CAP_PROP_FPS)
        self.frame_count = int(self.cap.get(cv2.CAP_PROP_FRAME_COUNT))
        self.frame_size = (int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
                           int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT)))
    
    def read_frame(self, frame_number: Optional[int] = None) -> Optional[np.ndarray]:
        """Read a specific frame or next frame."""
        if frame_number is not None:
            self.cap.set(cv2.CAP_PROP_POS_FRAMES, frame_number)
        
        ret, frame = self.cap.read()
        return frame if ret else None
    
    def frames(self) -> Iterator[np.ndarray]:
        """Iterate over the remaining frames."""
        while True:
            frame = self.read_frame()
            if frame is None:
                return
            yield frame
    
    def release(self):
        """Release video capture."""
        self.cap.release()
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()


class MaskWriter:
    """Write single-channel masks to a video file."""
    
    def __init__(self, output_path: str, fps: float, frame_size: Tuple[int, int],
                 codec: str = 'mp4v'):
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        fourcc = cv2.VideoWriter_fourcc(*codec)
        self.writer = cv2.VideoWriter(str(output_path), fourcc, fps, frame_size, isColor=False)
        if not self.writer.isOpened():
            raise IOError(f"Cannot open video writer: {output_path} ({codec})")
    
    def write(self, mask: np.ndarray):
        self.writer.write(mask)
    
    def release(self):
        self.writer.release()
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()


def save_image(image: np.ndarray, output_path: str):
    """Save a frame or mask, creating parent directories."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(output_path), image):
        raise IOError(f"Failed to write image: {output_path}")


def load_image(image_path: str, grayscale: bool = False) -> Optional[np.ndarray]:
    """Load a frame, or a mask when grayscale is set; None if unreadable."""
    flags = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_COLOR
    return cv2.imread(str(image_path), flags)
