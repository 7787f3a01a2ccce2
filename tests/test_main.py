import cv2
import numpy as np

from pathtracer.config import RenderConfig
from pathtracer.core.renderer import Renderer
from pathtracer.core.scene import Scene
from pathtracer.main import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.samples, args.max_depth) == (360, 240, 100, 10)
    assert args.frames == 1
    assert not args.no_display


def test_headless_run_saves_image(tmp_path):
    out = tmp_path / "render.png"
    code = main([
        "--width", "4", "--height", "3", "--samples", "1", "--frames", "2",
        "--seed", "1", "--no-display", "--save", str(out), "--log-level", "WARNING",
    ])

    assert code == 0
    image = cv2.imread(str(out))
    assert image.shape == (3, 4, 3)


def test_invalid_configuration_exit_code():
    assert main(["--width", "0", "--no-display"]) == 2


def test_renderer_progressive_result():
    renderer = Renderer(RenderConfig.from_settings(width=2, height=2, samples_per_pixel=1, seed=0),
                        scene=Scene([]))
    before = renderer.get_progressive_result()
    assert before.shape == (2, 2, 3)
    assert not before.any()

    renderer.render_frame()
    assert renderer.frame_count == 1
    assert (renderer.get_progressive_result() == np.array([10, 10, 20], dtype=np.uint8)).all()

    renderer.reset_accumulator()
    assert renderer.frame_count == 0


def test_renderer_releases_worker_pool():
    config = RenderConfig.from_settings(width=2, height=2, samples_per_pixel=1, workers=2, seed=0)
    renderer = Renderer(config, scene=Scene([]))
    renderer.render_frame()
    old_sampler = renderer.sampler
    assert old_sampler._pool is not None

    renderer.set_scene(Scene([]))
    assert old_sampler._pool is None

    renderer.render_frame()
    renderer.close()
    assert renderer.sampler._pool is None
