"""Tests for edge extension and blur compositing."""

import pytest
import numpy as np
import torch

from curveblur.core import extend_edges, composite, sample_offsets


def _rgba(h, w, seed=0):
    g = torch.Generator().manual_seed(seed)
    img = torch.rand(4, h, w, generator=g)
    img[3] = 1.0
    return img


class TestExtendEdges:
    def test_shape(self):
        img = _rgba(6, 9)
        assert extend_edges(img, 4).shape == (4, 14, 17)

    def test_zero_radius(self):
        img = _rgba(5, 5)
        assert torch.equal(extend_edges(img, 0), img)

    def test_negative_radius(self):
        with pytest.raises(ValueError):
            extend_edges(_rgba(3, 3), -1)

    def test_center_and_borders(self):
        img = _rgba(5, 7, seed=1)
        r = 3
        ext = extend_edges(img, r)

        assert torch.equal(ext[:, r:r + 5, r:r + 7], img)
        # Strips replicate the outermost row/column
        for k in range(r):
            assert torch.equal(ext[:, k, r:r + 7], img[:, 0])
            assert torch.equal(ext[:, r + 5 + k, r:r + 7], img[:, -1])
            assert torch.equal(ext[:, r:r + 5, k], img[:, :, 0])
            assert torch.equal(ext[:, r:r + 5, r + 7 + k], img[:, :, -1])
        # Corners replicate the corner pixel
        assert (ext[:, :r, :r] == img[:, 0, 0].view(4, 1, 1)).all()
        assert (ext[:, :r, -r:] == img[:, 0, -1].view(4, 1, 1)).all()
        assert (ext[:, -r:, :r] == img[:, -1, 0].view(4, 1, 1)).all()
        assert (ext[:, -r:, -r:] == img[:, -1, -1].view(4, 1, 1)).all()

    def test_no_transparency_introduced(self):
        img = _rgba(4, 4)
        assert (extend_edges(img, 6)[3] == 1.0).all()


class TestSampleOffsets:
    def test_symmetric_around_zero(self):
        dirs = np.tile([1.0, 0.0], (5, 1))
        offsets = sample_offsets(dirs, 8)

        # f = -0.5, -0.25, 0, 0.25, 0.5 along the negated tangent
        assert offsets[:, 0].tolist() == [4, 2, 0, -2, -4]
        assert (offsets[:, 1] == 0).all()

    def test_single_sample_unshifted(self):
        assert sample_offsets(np.array([[0.0, 1.0]]), 10).tolist() == [[0, 0]]

    def test_zero_radius(self):
        dirs = np.tile([0.6, 0.8], (20, 1))
        assert (sample_offsets(dirs, 0) == 0).all()


class TestComposite:
    def test_zero_radius_identity(self):
        img = _rgba(8, 10, seed=3)
        dirs = np.tile([0.6, 0.8], (20, 1))

        out = composite(extend_edges(img, 0), dirs, 0, 10, 8)

        assert torch.equal(out, img)

    def test_output_shape(self):
        img = _rgba(8, 10)
        dirs = np.tile([1.0, 0.0], (20, 1))
        out = composite(extend_edges(img, 5), dirs, 5, 10, 8)
        assert out.shape == (4, 8, 10)

    def test_uniform_image_unchanged(self):
        img = torch.full((4, 6, 6), 0.25)
        img[3] = 1.0
        dirs = np.tile([0.0, 1.0], (7, 1))

        out = composite(extend_edges(img, 4), dirs, 4, 6, 6)

        assert torch.allclose(out, img)

    def test_horizontal_blur_is_box_average(self):
        # Single bright column; K=3 horizontal samples at offsets +1, 0, -1
        img = torch.zeros(4, 3, 7)
        img[3] = 1.0
        img[:3, :, 3] = 0.9
        dirs = np.tile([1.0, 0.0], (3, 1))

        out = composite(extend_edges(img, 2), dirs, 2, 7, 3)

        assert torch.allclose(out[0, 1], torch.tensor([0, 0, 0.3, 0.3, 0.3, 0, 0]))
        assert torch.allclose(out[3], torch.ones(3, 7))

    def test_premultiplied_alpha(self):
        # Half the samples see a transparent pixel: colour stays, alpha halves
        img = torch.zeros(4, 1, 2)
        img[:, 0, 0] = torch.tensor([1.0, 0.5, 0.0, 1.0])
        dirs = np.tile([1.0, 0.0], (2, 1))

        out = composite(extend_edges(img, 2), dirs, 2, 2, 1)

        assert torch.allclose(out[:, 0, 0], torch.tensor([1.0, 0.5, 0.0, 0.5]))

    def test_rejects_non_rgba(self):
        with pytest.raises(ValueError):
            composite(torch.zeros(3, 4, 4), np.tile([1.0, 0.0], (2, 1)), 0, 4, 4)

    def test_deterministic(self):
        img = _rgba(12, 12, seed=5)
        dirs = np.array([[np.cos(a), np.sin(a)] for a in np.linspace(0, 1.5, 20)])
        ext = extend_edges(img, 6)

        assert torch.equal(composite(ext, dirs, 6, 12, 12), composite(ext, dirs, 6, 12, 12))
