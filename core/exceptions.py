"""
Error kinds raised by the analysis pipeline.
"""


class EntropyCropError(Exception):
    """Base class for all analysis and crop errors."""


class InvalidDimensionsError(EntropyCropError, ValueError):
    """Image or container dimensions are missing, zero or negative."""


class LoadError(EntropyCropError):
    """The pixel source could not fetch or decode the image."""


class MissingSourceError(EntropyCropError):
    """An element-based input has no resolvable image identifier."""


class PrecedenceError(EntropyCropError, RuntimeError):
    """resize() was called before a successful analyze()."""


class RasterError(EntropyCropError):
    """The rasterizer rejected the crop rectangle or failed to render it."""
