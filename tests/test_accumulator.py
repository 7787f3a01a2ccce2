import threading

import numpy as np
import pytest

from pathtracer.core.accumulator import AccumulatorState, ProgressiveAccumulator
from pathtracer.core.scene import default_scene


@pytest.fixture
def accumulator(empty_scene, make_sampler):
    return ProgressiveAccumulator(make_sampler(empty_scene, width=3, height=2), seed=5)


def _frame(value, shape=(2, 3, 3)):
    return np.full(shape, value, dtype=np.uint8)


def test_starts_idle(accumulator):
    assert accumulator.state is AccumulatorState.IDLE
    assert accumulator.frame_count == 0
    with pytest.raises(RuntimeError):
        accumulator.mean()


def test_identical_frames_average_to_the_frame(accumulator):
    frame = np.arange(18, dtype=np.uint8).reshape(2, 3, 3)
    for _ in range(7):
        mean = accumulator.add_frame(frame)

    assert accumulator.frame_count == 7
    assert np.array_equal(mean, frame)


def test_mean_weights_every_frame_equally(accumulator):
    accumulator.add_frame(_frame(10))
    accumulator.add_frame(_frame(21))
    assert (accumulator.mean() == 15).all()

    accumulator.add_frame(_frame(255))
    assert (accumulator.mean() == (10 + 21 + 255) // 3).all()
    assert accumulator.state is AccumulatorState.ACCUMULATING


def test_sum_does_not_overflow(accumulator):
    for _ in range(300):
        accumulator.add_frame(_frame(255))
    assert (accumulator.mean() == 255).all()


def test_mean_is_read_only(accumulator):
    mean = accumulator.add_frame(_frame(1))
    assert not mean.flags.writeable


@pytest.mark.parametrize("bad", [
    np.zeros((3, 2, 3), dtype=np.uint8),
    np.zeros((2, 3, 4), dtype=np.uint8),
    np.zeros((2, 3, 3), dtype=np.float32),
])
def test_rejects_mismatched_frames(accumulator, bad):
    with pytest.raises(ValueError):
        accumulator.add_frame(bad)
    assert accumulator.frame_count == 0


def test_reset_returns_to_idle(accumulator):
    accumulator.add_frame(_frame(3))
    accumulator.reset()
    assert accumulator.state is AccumulatorState.IDLE
    assert accumulator.frame_count == 0


def test_tick_renders_and_accumulates(accumulator):
    first = accumulator.tick()
    second = accumulator.tick()

    assert accumulator.frame_count == 2
    assert accumulator.last_render_time >= 0.0
    # Every sample escapes to the sky, so each frame is identical
    assert np.array_equal(first, second)
    assert (second == np.array([10, 10, 20], dtype=np.uint8)).all()


def test_seeded_accumulators_agree(make_sampler):
    sampler = make_sampler(default_scene(), width=3, height=2, samples=2)
    a = ProgressiveAccumulator(sampler, seed=123)
    b = ProgressiveAccumulator(sampler, seed=123)

    for _ in range(3):
        mean_a = a.tick()
        mean_b = b.tick()

    assert np.array_equal(mean_a, mean_b)


def test_mean_read_from_another_thread_is_never_torn(accumulator):
    accumulator.add_frame(_frame(200))
    stop = threading.Event()

    def add_frames():
        while not stop.is_set():
            accumulator.add_frame(_frame(200))

    writer = threading.Thread(target=add_frames, daemon=True)
    writer.start()
    try:
        for _ in range(2000):
            assert (accumulator.mean() == 200).all()
    finally:
        stop.set()
        writer.join()

    assert (accumulator.mean() == 200).all()
