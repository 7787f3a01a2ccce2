# FILE: pathtracer/gui/viewer.py
"""
Window that shows the progressive mean while frames render in the background
"""
import logging
import threading
import time
from queue import Empty, Queue
from typing import Dict, Optional

import cv2
import matplotlib.pyplot as plt
import numpy as np

from ..config import DisplayConfig
from ..core.renderer import Renderer

logger = logging.getLogger(__name__)


def upscale(frame: np.ndarray, width: int, height: int) -> np.ndarray:
    """Blow the image up to screen size without smoothing"""
    return cv2.resize(np.array(frame), (width, height), interpolation=cv2.INTER_NEAREST)


class FrameViewer:
    """matplotlib window fed by a render thread"""

    def __init__(self, renderer: Renderer, display: Optional[DisplayConfig] = None):
        self.renderer = renderer
        self.display = display or DisplayConfig.from_settings()

        self.is_rendering = False
        self.window_open = False
        self.frame_queue = Queue()
        self.render_thread = None
        self.last_image = None

        self.fig = None
        self.ax = None
        self.image = None

    def setup_gui(self):
        """Create the figure and the image artist"""
        d = self.display
        dpi = 100
        self.fig = plt.figure(figsize=(d.screen_width / dpi, d.screen_height / dpi), dpi=dpi)
        self.fig.canvas.manager.set_window_title(d.title)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.axis('off')

        empty = np.zeros((d.screen_height, d.screen_width, 3), dtype=np.uint8)
        self.image = self.ax.imshow(empty)

        self.fig.canvas.mpl_connect('close_event', self.on_close)
        self.window_open = True

    def start_rendering(self):
        if self.is_rendering:
            return

        self.is_rendering = True
        self.render_thread = threading.Thread(target=self._render_worker, daemon=True)
        self.render_thread.start()

    def stop_rendering(self):
        self.is_rendering = False

    def _frames_left(self) -> bool:
        max_frames = self.display.max_frames
        return max_frames == 0 or self.renderer.frame_count < max_frames

    def _render_worker(self):
        """Render frames one after another and queue each new mean"""
        try:
            while self.is_rendering and self._frames_left():
                mean = self.renderer.render_frame()
                self.frame_queue.put({
                    'image': mean,
                    'frame': self.renderer.frame_count,
                    'render_time': self.renderer.accumulator.last_render_time,
                })
        except Exception:
            logger.exception("Rendering failed")
            self.frame_queue.put({'error': True})
        else:
            self.frame_queue.put({'done': True, 'frames': self.renderer.frame_count})
        finally:
            self.is_rendering = False

    def get_frame(self) -> Optional[Dict]:
        try:
            return self.frame_queue.get_nowait()
        except Empty:
            return None

    def show_frame(self, frame: Dict):
        d = self.display
        self.image.set_data(upscale(frame['image'], d.screen_width, d.screen_height))
        title = f"Frame {frame['frame']}"
        self.fig.canvas.manager.set_window_title(title)
        self.fig.canvas.draw_idle()

    def on_close(self, event):
        self.window_open = False
        self.stop_rendering()

    def process_frames(self, show: bool = True):
        """Drain the queue, keeping the newest mean handed over by the render thread"""
        frame = self.get_frame()
        while frame is not None:
            if 'done' in frame:
                logger.info(f"Rendering completed after {frame['frames']} frames")
            elif 'error' in frame:
                logger.error("Render thread stopped")
            else:
                self.last_image = frame['image']
                if show:
                    self.show_frame(frame)
            frame = self.get_frame()

    def result(self) -> np.ndarray:
        """Newest mean received from the render thread; black if none arrived"""
        if self.last_image is None:
            cfg = self.renderer.config
            return np.zeros((cfg.height, cfg.width, 3), dtype=np.uint8)
        return self.last_image

    def run(self):
        """Main loop: render in the background, display every finished frame until closed"""
        self.setup_gui()
        self.start_rendering()
        plt.show(block=False)

        try:
            while self.window_open:
                self.process_frames()
                plt.pause(self.display.update_interval)
        except KeyboardInterrupt:
            logger.info("Stopping path tracer...")
        finally:
            self.stop_rendering()
            plt.close('all')

        # Frames that reached the queue count; one still in flight is dropped
        self.process_frames(show=False)
        return self.result()


def show_frames(renderer: Renderer, display: Optional[DisplayConfig] = None) -> np.ndarray:
    viewer = FrameViewer(renderer, display)
    start = time.time()
    result = viewer.run()
    logger.debug(f"Viewer closed after {time.time() - start:.1f}s")
    return result
