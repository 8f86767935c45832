import unittest

from ludo_engine.tokens import TokenPositions
from ludo_engine.types import Color


class TestTokenPositions(unittest.TestCase):
    def setUp(self):
        self.tokens = TokenPositions()

    def test_initial_tokens_home(self):
        for color in Color:
            self.assertEqual(self.tokens[color], (-1, -1, -1, -1))
        self.assertFalse(self.tokens.all_finished(Color.RED))

    def test_move_forward_and_send_home(self):
        self.tokens.move_to(Color.GREEN, 2, 0)
        self.tokens.move_to(Color.GREEN, 2, 14)
        self.assertEqual(self.tokens.position(Color.GREEN, 2), 14)
        self.tokens.send_home(Color.GREEN, 2)
        self.assertEqual(self.tokens.position(Color.GREEN, 2), -1)

    def test_rejects_out_of_domain(self):
        with self.assertRaises(ValueError):
            self.tokens.move_to(Color.RED, 0, 57)
        with self.assertRaises(ValueError):
            self.tokens.move_to(Color.RED, 0, -1)

    def test_rejects_backwards_move(self):
        self.tokens.move_to(Color.RED, 0, 20)
        with self.assertRaises(ValueError):
            self.tokens.move_to(Color.RED, 0, 19)

    def test_finished_token_is_immobile(self):
        self.tokens.move_to(Color.BLUE, 1, 56)
        with self.assertRaises(ValueError):
            self.tokens.move_to(Color.BLUE, 1, 56)
        with self.assertRaises(ValueError):
            self.tokens.send_home(Color.BLUE, 1)
        self.assertEqual(self.tokens.position(Color.BLUE, 1), 56)

    def test_all_finished_and_on_track(self):
        for i in range(4):
            self.tokens.move_to(Color.YELLOW, i, 56)
        self.tokens.move_to(Color.RED, 3, 7)
        self.assertTrue(self.tokens.all_finished(Color.YELLOW))
        on_track = list(self.tokens.on_track([Color.RED, Color.YELLOW]))
        self.assertEqual(on_track, [(Color.RED, 3, 7)])

    def test_reset(self):
        self.tokens.move_to(Color.RED, 0, 30)
        self.tokens.reset()
        self.assertEqual(self.tokens[Color.RED], (-1, -1, -1, -1))


if __name__ == "__main__":
    unittest.main()
