"""Headless segmentation of a video into a foreground mask video."""

import sys
from datetime import datetime
from pathlib import Path

from pitchseg.config import DEFAULT_CONFIG, load_config
from pitchseg.core import BackgroundRemover
from pitchseg.utils.io_handler import MaskWriter, VideoReader
from pitchseg.utils.logger import setup_logger


def session_log_file(log_dir: str = 'logs') -> str:
    """Timestamped log file path for this run."""
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return str(Path(log_dir) / f"segment_video_{timestamp}.log")


def main():
    """Segment every frame of a video."""
    if len(sys.argv) < 3:
        print("Usage: python segment_video.py <input_video> <output_video> [config.yaml]")
        sys.exit(1)
    
    video_path, output_path = sys.argv[1], sys.argv[2]
    config = load_config(sys.argv[3]) if len(sys.argv) > 3 else DEFAULT_CONFIG
    
    logger = setup_logger('pitchseg', log_file=session_log_file())
    
    if not Path(video_path).exists():
        logger.error(f"Video not found at '{video_path}'")
        sys.exit(1)
    
    with VideoReader(video_path) as reader:
        width, height = reader.frame_size
        config = {**config, 'frame': {'width': width, 'height': height}}
        remover = BackgroundRemover.from_config(config)
        
        logger.info(f"Processing {reader.frame_count} frames at {width}x{height}...")
        
        with MaskWriter(output_path, reader.fps or 25.0, reader.frame_size) as writer:
            for i, frame in enumerate(reader.frames()):
                mask = remover.process_frame(frame)
                writer.write(mask)
                if (i + 1) % 100 == 0:
                    logger.info(f"Processed {i + 1} frames")
    
    stats = remover.stats
    avg_ms = stats['total_processing_time'] / max(stats['total_frames'], 1)
    logger.info(f"Done: {stats['total_frames']} frames, {stats['scene_cuts']} scene cuts, "
                f"{avg_ms:.2f} ms/frame")
    logger.info(f"Masks saved to {output_path}")


if __name__ == "__main__":
    main()
