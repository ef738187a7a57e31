import unittest

from nodegrad import Linear, Module, Parameter, ReLU, Tensor


class _TwoLayer(Module):
    def __init__(self):
        super().__init__()
        self.scale = Parameter([2.0])
        self.fc1 = Linear(3, 4, seed=1)
        self.act = ReLU()
        self.fc2 = Linear(4, 2, bias=False, seed=2)

    def forward(self, x):
        return self.fc2(self.act(self.fc1(x))) * self.scale


class TestModuleRegistration(unittest.TestCase):
    def test_parameters_are_discovered_recursively(self):
        m = _TwoLayer()
        names = [n for n, _ in m.named_parameters()]
        self.assertEqual(names, ["scale", "fc1.weight", "fc1.bias", "fc2.weight"])
        self.assertEqual(len(list(m.parameters())), 4)

    def test_params_flattens_leaves(self):
        m = _TwoLayer()
        self.assertEqual(len(m.params()), 1 + 3 * 4 + 4 + 4 * 2)

    def test_assigning_none_unregisters(self):
        m = _TwoLayer()
        m.scale = None
        self.assertNotIn("scale", [n for n, _ in m.named_parameters()])

    def test_call_delegates_to_forward(self):
        m = _TwoLayer()
        out = m(Tensor.ones([5, 3]))
        self.assertEqual(out.shape, (5, 2))

    def test_base_forward_is_abstract(self):
        with self.assertRaises(NotImplementedError):
            Module()(None)

    def test_module_zero_grad(self):
        m = _TwoLayer()
        out = m(Tensor.ones([2, 3])).sum()
        out.backward(1.0)
        self.assertTrue(any(n.grad is not None for n in m.params()))
        m.zero_grad()
        self.assertTrue(all(n.grad is None for n in m.params()))


if __name__ == "__main__":
    unittest.main()
