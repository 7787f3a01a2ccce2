from .viewer import FrameViewer, show_frames, upscale
from .export import save_image
