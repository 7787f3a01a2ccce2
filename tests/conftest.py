"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

import numpy as np
import pytest

# Headless matplotlib for the viewer tests
os.environ.setdefault("MPLBACKEND", "Agg")

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pathtracer.core import Color, PathIntegrator, PixelSampler, Scene, Sphere, Vector3  # noqa: E402


@pytest.fixture
def rng():
    """Seeded generator for reproducible sampling."""
    return np.random.default_rng(1234)


@pytest.fixture
def empty_scene():
    return Scene([])


@pytest.fixture
def light_filling_view():
    """A single white light that every camera ray of a 1x1 image hits."""
    return Scene([
        Sphere(Vector3(-50.0, 50.0, 50.0), 60.0, Color(1.0, 1.0, 1.0), is_emissive=True),
    ])


@pytest.fixture
def make_sampler():
    """Factory for small samplers over a given scene."""
    def _make(scene, width=1, height=1, samples=1, workers=1, max_depth=10):
        integrator = PathIntegrator(scene, max_depth=max_depth)
        return PixelSampler(integrator, width, height, samples_per_pixel=samples, workers=workers)
    return _make
