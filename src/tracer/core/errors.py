"""Exceptions raised by the rendering pipeline.

The device code itself never fails: every ray maps to a well-defined
intersection (possibly the no-intersection sentinel) and every scatter yields
a direction. Failures therefore only surface at the dispatch boundary.
"""


class RenderConfigurationError(ValueError):
    """A render was requested with parameters it cannot honour.

    Raised before any work is dispatched, e.g. for a resolution below 2 in
    either axis (the camera divides by width - 1 and height - 1) or a sample
    count below 1.
    """


class RenderError(RuntimeError):
    """The execution backend failed while a render was in flight.

    The whole render is considered failed; no partial image is returned.
    The backend exception is chained as ``__cause__``.
    """
