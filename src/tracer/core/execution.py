"""Device selection and kernel dispatch.

Taichi can only be initialised once per process without invalidating every
field allocated so far, so device selection is process-wide: the first call
to select_device() picks the backend and its ti.init() options, and later
calls reuse them. Later requests for different options are logged and ignored.

The ExecutionContext is the single place where kernels are launched. Any
failure reported by the Taichi runtime while a kernel compiles or runs is
converted into one RenderError; there is no retry and no partial result.
"""

import logging

import taichi as ti
from taichi.lang.exception import TaichiCompilationError, TaichiRuntimeError

from tracer.core.errors import RenderError

logger = logging.getLogger(__name__)

# Backend and ti.init() options chosen by the first select_device() call
_active_arch = None
_active_init_kwargs = {}


def select_device(force_host_cpu: bool = False, **init_kwargs):
    """Initialise Taichi on the host CPU or the best available GPU.

    When a GPU is requested but none is usable, Taichi itself falls back to
    the CPU backend; the returned arch reflects what was actually selected.

    Args:
        force_host_cpu: Always use the CPU backend.
        **init_kwargs: Extra keyword arguments forwarded to ti.init()
            (e.g. debug, fast_math, cpu_max_num_threads).

    Returns:
        The active Taichi arch.
    """
    global _active_arch, _active_init_kwargs

    requested = ti.cpu if force_host_cpu else ti.gpu
    if _active_arch is not None:
        if force_host_cpu and _active_arch != ti.cpu:
            logger.warning(
                "Host CPU requested but Taichi is already running on %s; reusing it",
                _active_arch.name,
            )
        ignored = sorted(key for key, value in init_kwargs.items() if _active_init_kwargs.get(key) != value)
        if ignored:
            logger.warning(
                "Taichi is already initialised; ignoring changed options %s",
                ", ".join(f"{key}={init_kwargs[key]!r}" for key in ignored),
            )
        return _active_arch

    ti.init(arch=requested, **init_kwargs)
    _active_arch = ti.lang.impl.current_cfg().arch
    _active_init_kwargs = dict(init_kwargs)
    logger.info("Taichi initialised on %s", _active_arch.name)
    return _active_arch


def active_arch():
    """Return the arch chosen by select_device(), or None if not yet selected."""
    return _active_arch


class ExecutionContext:
    """Launches kernels on the selected device.

    Attributes:
        arch: The Taichi arch kernels run on.
    """

    def __init__(self, force_host_cpu: bool = False, **init_kwargs):
        self.arch = select_device(force_host_cpu=force_host_cpu, **init_kwargs)

    @property
    def device_name(self) -> str:
        """Name of the selected backend, e.g. "x64", "cuda" or "vulkan"."""
        return self.arch.name

    def submit(self, kernel, *args):
        """Run a kernel to completion.

        Args:
            kernel: A @ti.kernel (or bound data-oriented kernel).
            *args: Arguments forwarded to the kernel.

        Returns:
            Whatever the kernel returns.

        Raises:
            RenderError: If Taichi fails to compile or run the kernel.
        """
        try:
            result = kernel(*args)
            ti.sync()
        except (TaichiCompilationError, TaichiRuntimeError) as exc:
            logger.error("Kernel %s failed on %s: %s", _kernel_name(kernel), self.device_name, exc)
            raise RenderError(f"Rendering failed on {self.device_name}: {exc}") from exc
        return result


def _kernel_name(kernel) -> str:
    return getattr(kernel, "__name__", repr(kernel))
