import argparse
import time
from collections import Counter

from loguru import logger

from ludo_engine import Simulator, config
from ludo_engine.simulator import heuristic_chooser, random_chooser

CHOOSERS = {"heuristic": heuristic_chooser, "random": random_chooser}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play automated Ludo games and report finishing order"
    )
    parser.add_argument(
        "--num-players",
        type=int,
        default=config.NUM_PLAYERS,
        choices=[2, 3, 4],
        help="Number of players in the game",
    )
    parser.add_argument(
        "--games", type=int, default=10, help="Number of games to simulate"
    )
    parser.add_argument("--seed", type=int, default=42, help="Base random seed")
    parser.add_argument(
        "--chooser",
        choices=sorted(CHOOSERS),
        default="heuristic",
        help="How every color picks its token",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    winners: Counter = Counter()
    unfinished = 0
    total_rolls = 0

    print(f"--- Simulating {args.games} game(s) with {args.num_players} players ---")
    start_time = time.time()
    for game_idx in range(args.games):
        sim = Simulator.for_players(
            args.num_players,
            seed=args.seed + game_idx,
            default_chooser=CHOOSERS[args.chooser],
        )
        result = sim.run()
        total_rolls += result.rolls
        if not result.finished:
            unfinished += 1
        if result.ranking:
            winners[str(result.ranking[0])] += 1
        logger.info(
            f"Game {game_idx + 1}: ranking={[str(c) for c in result.ranking]} "
            f"rolls={result.rolls} captures={result.captures}"
        )

    print("\n--- SIMULATION COMPLETE ---")
    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")
    print(f"Average rolls per game: {total_rolls / max(args.games, 1):.1f}")
    for color, wins in winners.most_common():
        print(f"  {color}: {wins} win(s)")
    if unfinished:
        print(f"Unfinished games (hit {config.MAX_TURNS} rolls): {unfinished}")


if __name__ == "__main__":
    main()
