"""
Unit tests for the cli_analyze entry point.
"""
import argparse
import json

import pytest
from PIL import Image

from cli_analyze import main, parse_dimensions, parse_point
from core.models import Dimensions, Point


class TestArgumentParsers:
    """Tests for argument type helpers."""

    def test_parse_dimensions(self):
        assert parse_dimensions('800x600') == Dimensions(800.0, 600.0)
        assert parse_dimensions('800X600') == Dimensions(800.0, 600.0)

    @pytest.mark.parametrize("value", ['800', 'axb', '0x600', 'nanx600', 'infx600'])
    def test_parse_dimensions_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_dimensions(value)

    def test_parse_point(self):
        assert parse_point('1800,900') == Point(1800.0, 900.0)

    def test_parse_point_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_point('1800')


class TestCropCommand:
    """Tests for the crop subcommand."""

    def test_point_near_right_edge(self, capsys):
        code = main(['crop', '--image', '2000x1000', '--container', '800x600', '--point', '1800,900'])

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['cssImage']['backgroundPosition'] == '100% 50%'
        assert payload['resizedImage']['position'] == {
            'left': 667, 'top': 0, 'width': 1333, 'height': 1000
        }

    def test_without_point_centers(self, capsys):
        code = main(['crop', '--image', '2000x1000', '--container', '800x600'])

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['cssImage']['backgroundPosition'] == '50% 50%'

    def test_invalid_min_percentage(self):
        assert main(['crop', '--image', '10x10', '--min-percentage', '0']) == 2


class TestAnalyzeCommand:
    """Tests for the analyze subcommand."""

    def test_writes_crop_and_overlay(self, capsys, sample_image_path, temp_dir):
        output = temp_dir / 'out.jpg'
        overlay = temp_dir / 'overlay.png'

        code = main([
            'analyze', sample_image_path,
            '--container', '32x64',
            '--backend', 'pillow',
            '-o', str(output),
            '--overlay', str(overlay),
        ])

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['originalSize'] == {'width': 128, 'height': 128}
        assert isinstance(payload['originalSize']['width'], int)
        assert len(payload['entropyMap']) == 12
        with Image.open(output) as img:
            assert img.size == (32, 64)
        with Image.open(overlay) as img:
            assert img.size == (128, 128)

    def test_missing_file(self, temp_dir):
        code = main(['analyze', str(temp_dir / 'missing.png'), '--backend', 'pillow'])

        assert code == 2


def test_no_command():
    assert main([]) == 1
