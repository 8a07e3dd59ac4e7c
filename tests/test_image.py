"""Tests for the rendered image container."""

import numpy as np
import pytest

from pathtracer.core.image import Image
from pathtracer.core.vec import Color


class TestImage:
    """Tests for pixel layout and access."""

    def test_blank_is_black(self):
        """Test a blank image has every channel at zero."""
        image = Image.blank(3, 2)
        assert image.pixels.shape == (6, 3)
        assert not np.any(image.pixels)

    def test_index_is_row_major(self):
        """Test pixel (col, row) lives at row * width + col."""
        image = Image.blank(3, 2)
        assert image.index(0, 0) == 0
        assert image.index(2, 0) == 2
        assert image.index(0, 1) == 3
        assert image.index(2, 1) == 5

    def test_set_and_get_pixel(self):
        """Test a written pixel is read back at its flat index."""
        image = Image.blank(3, 2)
        image.set_pixel(1, 1, Color(0.25, 0.5, 0.75))
        assert image.get_pixel(1, 1) == Color(0.25, 0.5, 0.75)
        assert image.pixels[image.index(1, 1)].tolist() == [0.25, 0.5, 0.75]
        assert image.get_pixel(1, 0) == Color(0.0, 0.0, 0.0)

    def test_to_array_shape(self):
        """Test the array view is (height, width, 3)."""
        image = Image.blank(3, 2)
        image.set_pixel(2, 1, Color(1.0, 0.0, 0.0))
        array = image.to_array()
        assert array.shape == (2, 3, 3)
        assert array[1, 2].tolist() == [1.0, 0.0, 0.0]

    def test_shape_mismatch_rejected(self):
        """Test the pixel array must match the dimensions."""
        with pytest.raises(ValueError, match="does not match"):
            Image(2, 2, np.zeros((3, 3)))
