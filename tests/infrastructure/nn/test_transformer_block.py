import unittest

import numpy as np

from nodegrad import ShapeMismatchError, Tensor, TransformerBlock, TransformerConfig


class TestTransformerBlock(unittest.TestCase):
    def setUp(self):
        self.config = TransformerConfig(
            embed_dim=4, num_heads=2, seq_len=3, batch_size=2, seed=0
        )

    def test_construction(self):
        block = TransformerBlock(self.config)
        self.assertEqual(block.lin1.weight.shape, (4, 16))
        self.assertEqual(block.lin2.weight.shape, (16, 4))
        self.assertEqual(block.attention.num_heads, 2)

    def test_forward_preserves_shape(self):
        block = TransformerBlock(self.config)
        x = Tensor(np.random.default_rng(0).normal(size=(2, 3, 4)))
        out = block(x)
        self.assertEqual(out.shape, (2, 3, 4))

    def test_forward_on_zero_leaves(self):
        block = TransformerBlock(self.config)
        x = Tensor.leaves(np.zeros((2, 3, 4)))
        out = block(x)
        self.assertEqual(out.shape, (2, 3, 4))
        self.assertTrue(np.all(np.isfinite(out.to_numpy())))

    def test_residual_structure(self):
        block = TransformerBlock(self.config)
        x0 = np.random.default_rng(1).normal(size=(1, 3, 4))
        x = Tensor(x0)
        r1 = block.attention(x).to_numpy() + x0
        h = np.maximum(r1 @ block.lin1.weight.to_numpy() + block.lin1.bias.to_numpy(), 0.0)
        ref = h @ block.lin2.weight.to_numpy() + block.lin2.bias.to_numpy() + r1
        np.testing.assert_allclose(block(x).to_numpy(), ref, rtol=1e-9, atol=1e-12)

    def test_wrong_channel_size(self):
        with self.assertRaises(ShapeMismatchError):
            TransformerBlock(self.config)(Tensor.zeros([2, 3, 5]))


if __name__ == "__main__":
    unittest.main()
