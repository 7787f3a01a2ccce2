#!/usr/bin/env python3
"""
Progressive sphere path tracer - command line entry point
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

from .config import DISPLAY_SETTINGS, RENDER_SETTINGS, DisplayConfig, RenderConfig
from .core.renderer import Renderer
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Monte Carlo path tracer for a small scene of spheres",
    )
    parser.add_argument("--width", type=int, default=RENDER_SETTINGS['width'])
    parser.add_argument("--height", type=int, default=RENDER_SETTINGS['height'])
    parser.add_argument("--samples", type=int, default=RENDER_SETTINGS['samples_per_pixel'],
                        help="samples per pixel per frame")
    parser.add_argument("--max-depth", type=int, default=RENDER_SETTINGS['max_depth'])
    parser.add_argument("--frames", type=int, default=DISPLAY_SETTINGS['max_frames'],
                        help="frames to accumulate (0 = until the window is closed)")
    parser.add_argument("--workers", type=int, default=RENDER_SETTINGS['workers'])
    parser.add_argument("--seed", type=int, default=RENDER_SETTINGS['seed'])
    parser.add_argument("--save", metavar="PATH", help="write the final image to PATH")
    parser.add_argument("--no-display", action="store_true",
                        help="render without opening a window")
    parser.add_argument("--log-level", default="INFO")
    return parser


def render_headless(renderer: Renderer, frames: int):
    """Accumulate a fixed number of frames without a window"""
    start = time.time()
    for _ in range(max(1, frames)):
        renderer.render_frame()
    logger.info(f"Accumulated {renderer.frame_count} frames in {time.time() - start:.3f}s")
    return renderer.get_progressive_result()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = RenderConfig.from_settings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.max_depth,
            workers=args.workers,
            seed=args.seed,
        )
        display = DisplayConfig.from_settings(max_frames=args.frames)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    renderer = Renderer(config)
    try:
        if args.no_display:
            result = render_headless(renderer, display.max_frames)
        else:
            from .gui.viewer import show_frames
            result = show_frames(renderer, display)
    finally:
        renderer.close()

    if args.save:
        from .gui.export import save_image
        save_image(args.save, result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
