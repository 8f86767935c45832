import unittest

from ludo_engine.config import HeuristicWeights
from ludo_engine.game import Game
from ludo_engine.heuristic import best_move, build_move_options, score_move
from ludo_engine.types import Color
from scripted_dice import ScriptedRandom


def rolled_game(placements, roll, turn=Color.RED, num_players=4):
    """Game with forced token positions and ``roll`` already pending for ``turn``."""
    game = Game(num_players=num_players, rng=ScriptedRandom([roll]))
    game.turn = turn
    for color, token_index, position in placements:
        game.tokens.move_to(color, token_index, position)
    game.roll_dice()
    return game


class TestBestMove(unittest.TestCase):
    def test_no_pending_roll(self):
        game = Game(num_players=2, rng=ScriptedRandom())
        self.assertIsNone(game.dice_roll)
        self.assertEqual(game.best_move(), -1)

    def test_empty_legal_set(self):
        game = Game(num_players=2)
        self.assertEqual(
            best_move(game.board, game.tokens, game.players, Color.BLUE, 3, []), -1
        )

    def test_finish_beats_capture(self):
        game = rolled_game(
            [(Color.RED, 0, 53), (Color.RED, 1, 46), (Color.BLUE, 0, 10)], roll=3
        )
        self.assertEqual(game.valid_token_indices, [0, 1])
        self.assertEqual(game.best_move(), 0)

    def test_prefers_capture(self):
        game = rolled_game(
            [(Color.RED, 0, 45), (Color.RED, 1, 20), (Color.BLUE, 0, 10)], roll=4
        )
        options = build_move_options(
            game.board, game.tokens, game.players, Color.RED, 4, [0, 1]
        )
        self.assertEqual(options[0].capture_count, 1)
        self.assertEqual(options[1].capture_count, 0)
        self.assertEqual(game.best_move(), 0)

    def test_avoids_threatened_square(self):
        # blue at 41 can reach red's 32nd square (10, 8) with a 4
        game = rolled_game(
            [(Color.RED, 0, 20), (Color.RED, 1, 30), (Color.BLUE, 0, 41)], roll=2
        )
        options = build_move_options(
            game.board, game.tokens, game.players, Color.RED, 2, [0, 1]
        )
        self.assertEqual([o.threat_count for o in options], [0, 1])
        self.assertEqual(game.best_move(), 0)

    def test_progress_wins_without_threat(self):
        game = rolled_game([(Color.RED, 0, 20), (Color.RED, 1, 30)], roll=2)
        self.assertEqual(game.best_move(), 1)

    def test_weights_are_tunable(self):
        game = rolled_game(
            [(Color.RED, 0, 20), (Color.RED, 1, 30), (Color.BLUE, 0, 41)], roll=2
        )
        fearless = HeuristicWeights(risk=0.0)
        choice = best_move(
            game.board,
            game.tokens,
            game.players,
            Color.RED,
            game.dice_roll,
            game.valid_token_indices,
            weights=fearless,
        )
        self.assertEqual(choice, 1)

    def test_leaving_home_preferred_and_ties_keep_first(self):
        game = rolled_game([(Color.RED, 1, 10)], roll=6)
        self.assertEqual(game.valid_token_indices, [0, 1, 2, 3])
        self.assertEqual(game.best_move(), 0)

    def test_tie_break_follows_legal_order(self):
        game = rolled_game([(Color.RED, 0, 56)], roll=6)
        self.assertEqual(game.valid_token_indices, [1, 2, 3])
        self.assertEqual(game.best_move(), 1)

    def test_safe_square_ignores_threat(self):
        # green at 44 can reach red's 8th (safe) and 9th squares
        game = rolled_game(
            [(Color.RED, 0, 3), (Color.RED, 1, 4), (Color.GREEN, 0, 44)], roll=5
        )
        options = build_move_options(
            game.board, game.tokens, game.players, Color.RED, 5, [0, 1]
        )
        self.assertTrue(options[0].lands_safe)
        self.assertEqual(options[0].threat_count, 0)
        self.assertEqual(options[1].threat_count, 1)
        self.assertEqual(game.best_move(), 0)

    def test_final_approach_bonus(self):
        game = rolled_game([(Color.RED, 0, 48), (Color.RED, 1, 10)], roll=4)
        options = build_move_options(
            game.board, game.tokens, game.players, Color.RED, 4, [0, 1]
        )
        self.assertTrue(options[0].in_final_approach)
        self.assertEqual(game.best_move(), 0)


class TestScoreOrdering(unittest.TestCase):
    def test_bonus_ordering(self):
        w = HeuristicWeights()
        self.assertGreater(w.final, w.capture)
        self.assertGreater(w.capture, w.leave_home)
        self.assertGreater(w.leave_home, w.safe_zone)
        self.assertGreater(w.safe_zone, w.final_approach)
        self.assertGreater(w.final_approach, w.progress)

    def test_score_is_additive(self):
        game = rolled_game(
            [(Color.RED, 0, 45), (Color.BLUE, 0, 10)], roll=4
        )
        option = build_move_options(
            game.board, game.tokens, game.players, Color.RED, 4, [0]
        )[0]
        w = HeuristicWeights()
        self.assertAlmostEqual(score_move(option, w), w.capture + 49 * w.progress)


if __name__ == "__main__":
    unittest.main()
