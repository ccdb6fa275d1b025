#!/usr/bin/env python3
"""
CLI runner for entropy-based crop analysis.

Commands:
  analyze  Analyze an image file or URL and print the result record
  crop     Solve a crop from raw geometry without loading an image
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from api.schemas import AnalysisResponse
from config.settings import settings
from core.exceptions import EntropyCropError
from core.models import Dimensions, Point
from entropy.crop_solver import compute_crop
from services.analyzer_service import ImageEntropyAnalyzer
from services.backends import detect_backend
from utils.logging_config import setup_logging
from utils.overlay import draw_entropy_overlay

logger = logging.getLogger(__name__)


def parse_dimensions(value: str) -> Dimensions:
    """Parse 'WIDTHxHEIGHT' (e.g. '800x600')."""
    try:
        width, height = value.lower().split('x', 1)
        return Dimensions(float(width), float(height))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{value}'") from exc


def parse_point(value: str) -> Point:
    """Parse 'X,Y' (e.g. '320,240')."""
    try:
        x, y = value.split(',', 1)
        return Point(float(x), float(y))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected X,Y, got '{value}'") from exc


async def analyze_cli(
    source: str,
    container: Optional[Dimensions] = None,
    min_percentage: Optional[float] = None,
    block_size: Optional[int] = None,
    threshold: Optional[float] = None,
    backend: str = 'auto',
    output_path: Optional[str] = None,
    overlay_path: Optional[str] = None
) -> AnalysisResponse:
    """Analyze one image, optionally writing the crop and a debug overlay."""
    analyzer = ImageEntropyAnalyzer(
        block_size=block_size,
        high_entropy_threshold=threshold,
        backend=detect_backend(backend, timeout=settings.http_timeout)
    )

    result = await analyzer.analyze(
        source,
        container_dimensions=container,
        min_percentage=min_percentage
    )

    if output_path:
        await analyzer.resize_to_file(output_path)

    if overlay_path:
        overlay = draw_entropy_overlay(
            analyzer.pixel_buffer,
            result.entropy_map,
            result.entropy_center,
            analyzer.block_size
        )
        overlay.save(overlay_path, format='PNG')
        logger.info(f"Wrote debug overlay to {overlay_path}")

    return AnalysisResponse.from_result(result)


def crop_cli(
    image: Dimensions,
    container: Optional[Dimensions],
    point: Optional[Point],
    min_percentage: float
) -> dict:
    """Solve a crop from raw geometry."""
    return compute_crop(image, container, point, min_percentage).to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Entropy-based image crop analysis'
    )
    parser.add_argument('--log-level', type=str, default=settings.log_level, help='Log level')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Analyze an image file or URL')
    analyze_parser.add_argument('source', type=str, help='Image path, http(s) URL or data URL')
    analyze_parser.add_argument('--container', type=parse_dimensions, help='Container size WIDTHxHEIGHT')
    analyze_parser.add_argument('--min-percentage', type=float, default=None, help='Minimum visible percentage')
    analyze_parser.add_argument('--block-size', type=int, default=None, help='Block size in pixels')
    analyze_parser.add_argument('--threshold', type=float, default=None, help='High-entropy fraction (0, 1]')
    analyze_parser.add_argument('--backend', type=str, default=settings.raster_backend, choices=['auto', 'pillow', 'opencv'], help='Raster backend')
    analyze_parser.add_argument('-o', '--output', type=str, help='Write the resized crop to this path')
    analyze_parser.add_argument('--overlay', type=str, help='Write a debug overlay PNG to this path')

    # Crop command
    crop_parser = subparsers.add_parser('crop', help='Solve a crop from raw geometry')
    crop_parser.add_argument('--image', type=parse_dimensions, required=True, help='Image size WIDTHxHEIGHT')
    crop_parser.add_argument('--container', type=parse_dimensions, help='Container size WIDTHxHEIGHT')
    crop_parser.add_argument('--point', type=parse_point, help='Point of interest X,Y')
    crop_parser.add_argument('--min-percentage', type=float, default=settings.min_percentage, help='Minimum visible percentage')

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == 'analyze':
            response = asyncio.run(analyze_cli(
                source=args.source,
                container=args.container,
                min_percentage=args.min_percentage,
                block_size=args.block_size,
                threshold=args.threshold,
                backend=args.backend,
                output_path=args.output,
                overlay_path=args.overlay
            ))
            print(response.to_json())
        elif args.command == 'crop':
            print(json.dumps(crop_cli(args.image, args.container, args.point, args.min_percentage), indent=2))
        else:
            parser.print_help()
            return 1
    except (EntropyCropError, ValueError) as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 2

    return 0


if __name__ == '__main__':
    sys.exit(main())
