"""
Writing finished buffers to disk
"""
import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from .viewer import upscale

logger = logging.getLogger(__name__)


def save_image(path: Union[str, Path], frame: np.ndarray,
               width: Optional[int] = None, height: Optional[int] = None) -> Path:
    """Save an RGB uint8 buffer, optionally scaled to width x height"""
    path = Path(path)
    if width and height:
        frame = upscale(frame, width, height)

    if not cv2.imwrite(str(path), cv2.cvtColor(np.array(frame), cv2.COLOR_RGB2BGR)):
        raise IOError(f"Could not write image to {path}")

    logger.info(f"Saved {frame.shape[1]}x{frame.shape[0]} image to {path}")
    return path
