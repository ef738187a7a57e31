import unittest

import numpy as np

from nodegrad import Parameter, WeightInitializer


class TestWeightInitializerRegistry(unittest.TestCase):
    def test_builtins_are_registered(self):
        names = WeightInitializer.available()
        for name in ("kaiming", "kaiming_relu", "xavier", "xavier_normal", "xavier_uniform", "zeros", "ones"):
            self.assertIn(name, names)

    def test_unknown_name_raises(self):
        with self.assertRaises(ValueError):
            WeightInitializer("does_not_exist")

    def test_duplicate_registration_raises(self):
        with self.assertRaises(ValueError):

            @WeightInitializer.register_initializer("zeros")
            def _again(param, rng=None):
                return param

    def test_empty_name_rejected(self):
        with self.assertRaises(ValueError):
            WeightInitializer.register_initializer("")

    def test_register_and_dispatch_custom(self):
        name = "test_registry_fill_half"

        @WeightInitializer.register_initializer(name, overwrite=True)
        def fill_half(param, rng=None):
            return param.copy_from_numpy(np.full(param.shape, 0.5))

        try:
            p = Parameter(np.zeros((2, 2)))
            out = WeightInitializer(name)(p)
            self.assertIs(out, p)
            np.testing.assert_allclose(p.to_numpy(), np.full((2, 2), 0.5))
            self.assertIs(WeightInitializer.get(name), fill_half)
        finally:
            WeightInitializer.INITIALIZERS.pop(name, None)

    def test_constant_initializers_keep_leaf_identity(self):
        p = Parameter(np.full((3,), 7.0))
        before = p.nodes()
        WeightInitializer("zeros")(p)
        np.testing.assert_allclose(p.to_numpy(), np.zeros(3))
        WeightInitializer("ones")(p)
        np.testing.assert_allclose(p.to_numpy(), np.ones(3))
        for a, b in zip(before, p.nodes()):
            self.assertIs(a, b)


if __name__ == "__main__":
    unittest.main()
