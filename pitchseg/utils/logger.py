"""Logging setup for applications using pitchseg."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = 'pitchseg', log_level: Union[int, str] = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure a logger writing to stdout and optionally to a file.
    
    Library modules log under ``pitchseg.*``, so configuring the default
    name captures segmentation debug output as well.
    
    Args:
        name: Logger name
        log_level: Level as int or name ("DEBUG", "INFO", ...)
        log_file: Optional log file path; parent directories are created
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.getLevelName(log_level.upper()) if isinstance(log_level, str) else log_level)
    
    # Repeated calls reuse the existing handlers
    if logger.handlers:
        return logger
    
    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger
