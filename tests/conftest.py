"""Pytest configuration for tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. fast_math stays off
    so NaN/Inf handling behaves as in production renders.
    """
    from tracer.core.execution import select_device
    from tracer.core.renderer import RendererConfig

    select_device(force_host_cpu=True, **RendererConfig(force_host_cpu=True).init_kwargs())
    yield


@pytest.fixture(scope="session")
def renderer(init_taichi_session):
    """A CPU renderer shared by every test that renders."""
    from tracer.core.renderer import Renderer, RendererConfig

    return Renderer(RendererConfig(force_host_cpu=True))


@pytest.fixture
def scene_buffers(init_taichi_session):
    """Fresh device storage for a scene."""
    from tracer.scene.buffers import SceneBuffers

    return SceneBuffers()
