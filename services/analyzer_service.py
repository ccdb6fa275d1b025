"""
Image Entropy Analyzer - Orchestrates entropy analysis and crop materialization.

This service resolves the image and container, runs the entropy pipeline and
keeps the last successful analysis so resize() can materialize the crop.
"""
import logging
import os
from typing import Callable, Optional, Sequence, Union

from config.settings import Settings, settings as default_settings
from core.exceptions import MissingSourceError, PrecedenceError
from core.models import AnalysisResult, Dimensions, EntropyBlock, PixelBuffer, Point
from entropy.aggregator import validate_threshold
from entropy.crop_solver import DimensionsLike
from entropy.estimator import validate_block_size
from entropy.pipeline import run_analysis
from utils.image_utils import ImageSource, encode_pixel_buffer, pixel_buffer_to_data_url

from .backends import RasterBackend, detect_backend
from .layout_probe import ElementHandle, StyleLayoutProbe

logger = logging.getLogger(__name__)

DebugHook = Callable[[Sequence[EntropyBlock], Point], None]


class ImageEntropyAnalyzer:
    """Find the most detailed region of an image and frame it for a container."""

    def __init__(
        self,
        block_size: Optional[int] = None,
        high_entropy_threshold: Optional[float] = None,
        debug: Optional[bool] = None,
        backend: Optional[RasterBackend] = None,
        layout_probe: Optional[StyleLayoutProbe] = None,
        on_debug: Optional[DebugHook] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize analyzer.

        Args:
            block_size: Grid block edge in pixels (default from settings: 16)
            high_entropy_threshold: Fraction of blocks used for the centroid
                (default from settings: 0.2)
            debug: Invoke on_debug after each analysis (default from settings)
            backend: Pixel source and rasterizer (default: detected)
            layout_probe: Resolver for ElementHandle inputs
            on_debug: Hook called with (top_blocks, entropy_center)
            settings: Settings instance (default: global settings)
        """
        config = settings or default_settings
        defaults = config.get_analyzer_config()

        self.block_size = defaults['block_size'] if block_size is None else block_size
        self.high_entropy_threshold = (
            defaults['high_entropy_threshold'] if high_entropy_threshold is None
            else high_entropy_threshold
        )
        self.debug = defaults['debug'] if debug is None else debug
        validate_block_size(self.block_size)
        validate_threshold(self.high_entropy_threshold)

        self.min_percentage = config.min_percentage
        self.output_quality = config.output_quality
        self.backend = backend or detect_backend(config.raster_backend, timeout=config.http_timeout)
        self.layout_probe = layout_probe or StyleLayoutProbe()
        self.on_debug = on_debug

        self._analysis_result: Optional[AnalysisResult] = None
        self._image_source = None
        self._pixel_buffer: Optional[PixelBuffer] = None

    @property
    def analysis_result(self) -> Optional[AnalysisResult]:
        """Result of the last successful analyze() call."""
        return self._analysis_result

    @property
    def image_source(self):
        """Image identifier of the last successful analyze() call."""
        return self._image_source

    @property
    def pixel_buffer(self) -> Optional[PixelBuffer]:
        """Decoded pixels of the last successful analyze() call."""
        return self._pixel_buffer

    async def analyze(
        self,
        source: Union[ImageSource, PixelBuffer, ElementHandle],
        container_dimensions: Optional[DimensionsLike] = None,
        min_percentage: Optional[float] = None
    ) -> AnalysisResult:
        """
        Analyze an image and compute its optimal crop.

        Args:
            source: Path, URL, data URL, bytes, PIL image, PixelBuffer or
                ElementHandle
            container_dimensions: Target container; for elements defaults to
                the element's content box, otherwise to the image size
            min_percentage: Minimum visible percentage (default from settings)

        Returns:
            AnalysisResult

        Raises:
            MissingSourceError: If an element has no image
            LoadError: If the image cannot be loaded
            InvalidDimensionsError: If any dimension is not positive
        """
        if min_percentage is None:
            min_percentage = self.min_percentage

        if isinstance(source, ElementHandle):
            image_source = self.layout_probe.resolve_image_identifier(source)
            if not image_source:
                raise MissingSourceError(
                    f"Could not find image source in provided <{source.tag_name}> element"
                )
            if container_dimensions is None:
                container_dimensions = self.layout_probe.resolve_container_dimensions(source)
        else:
            image_source = source

        loaded = await self.backend.load(image_source)
        container = Dimensions.coerce(container_dimensions)

        result = run_analysis(
            loaded.buffer,
            container_size=container,
            block_size=self.block_size,
            high_entropy_threshold=self.high_entropy_threshold,
            min_percentage=min_percentage
        )

        # Publish only after the whole pipeline succeeded
        self._analysis_result = result
        self._image_source = image_source
        self._pixel_buffer = loaded.buffer

        logger.info(
            f"Analyzed {_describe(image_source)} ({loaded.width}x{loaded.height}) "
            f"-> {result.css_image.background_position}"
        )

        if self.debug:
            self._emit_debug(result)

        return result

    async def resize(self, result: Optional[AnalysisResult] = None) -> PixelBuffer:
        """
        Materialize the crop of the last analysis.

        Args:
            result: Analysis of the cached image; defaults to the last result

        Returns:
            PixelBuffer of resizedImage.width x resizedImage.height

        Raises:
            PrecedenceError: If no analyze() call has completed
            RasterError: If the backend rejects the crop rectangle
        """
        if self._analysis_result is None or self._pixel_buffer is None:
            raise PrecedenceError("Must call analyze() before resize()")

        result = result or self._analysis_result
        if result.original_size != self._pixel_buffer.size:
            raise ValueError(
                f"Result was computed for a {result.original_size.width}x"
                f"{result.original_size.height} image, cached image is "
                f"{self._pixel_buffer.width}x{self._pixel_buffer.height}"
            )

        resized = result.resized_image
        output = Dimensions(resized.width, resized.height)
        return await self.backend.extract_and_resize(self._pixel_buffer, resized.position, output)

    async def resize_to_file(
        self,
        output_path: Union[str, os.PathLike],
        image_format: str = 'JPEG',
        result: Optional[AnalysisResult] = None
    ) -> str:
        """
        Materialize the crop and write it to disk.

        Returns:
            The output path
        """
        buffer = await self.resize(result)
        data = encode_pixel_buffer(buffer, image_format=image_format, quality=self.output_quality)

        output_path = os.fspath(output_path)
        with open(output_path, 'wb') as f:
            f.write(data)

        logger.info(f"Wrote {buffer.width}x{buffer.height} crop to {output_path}")
        return output_path

    async def resize_to_data_url(
        self,
        image_format: str = 'JPEG',
        result: Optional[AnalysisResult] = None
    ) -> str:
        """Materialize the crop as a data: URL."""
        buffer = await self.resize(result)
        return pixel_buffer_to_data_url(buffer, image_format=image_format, quality=self.output_quality)

    def _emit_debug(self, result: AnalysisResult) -> None:
        if self.on_debug is not None:
            self.on_debug(result.entropy_map, result.entropy_center)
            return

        logger.info(
            f"Debug: {len(result.entropy_map)} high-entropy blocks, "
            f"center=({result.entropy_center.x:.1f}, {result.entropy_center.y:.1f})"
        )


def _describe(source) -> str:
    if isinstance(source, str):
        return source if len(source) <= 80 else f"{source[:77]}..."
    return type(source).__name__
