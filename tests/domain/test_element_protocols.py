import unittest

from nodegrad import IElement, IRealElement, Node


class TestElementProtocols(unittest.TestCase):
    def test_node_is_real_element(self):
        self.assertIsInstance(Node(1.0), IRealElement)
        self.assertIsInstance(Node(1.0), IElement)

    def test_float_is_element_but_not_real_element(self):
        self.assertIsInstance(1.5, IElement)
        self.assertNotIsInstance(1.5, IRealElement)

    def test_derived_nodes_keep_the_contract(self):
        n = (Node(2.0) * Node(3.0)).exp()
        self.assertIsInstance(n, IRealElement)


if __name__ == "__main__":
    unittest.main()
