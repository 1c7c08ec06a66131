"""
Console driver for the TicTacToe engine.

Plays one session in the terminal: type a cell number (1-9) to move,
'r' to start over, 'q' to quit. The computer answers after its thinking delay.

    python main.py                         # You are X, unbeatable AI
    python main.py --difficulty medium --ai-first
    python main.py --difficulty medium --fallibility 0.2
"""

import argparse
import logging
import threading

from engine import (
    BoardCleared,
    CellUpdated,
    Difficulty,
    FirstMover,
    GameConfig,
    GameEnded,
    InvalidMoveError,
    Mark,
    Opening,
    TurnController,
    TurnState,
)


class ConsoleGame:
    """
    Terminal front end.

    Only reacts to controller events; it never edits the board itself.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self._turn_over = threading.Event()

        print("\n" + "=" * 60)
        print("   TicTacToe")
        print(f"   Difficulty: {config.DIFFICULTY.name}")
        print(f"   You play: {config.human_mark}")
        print("=" * 60 + "\n")

        self.controller = TurnController(config, listeners=[self.on_event])

    def on_event(self, event) -> None:
        """Handle an engine event (may arrive on the timer thread)."""
        if isinstance(event, CellUpdated):
            who = "Computer" if event.by_ai else "You"
            print(f"\n>>> {who} placed {event.mark} at {event.index + 1}")
            if event.by_ai:
                self._turn_over.set()
        elif isinstance(event, GameEnded):
            self._show_result(event)
            self._turn_over.set()
        elif isinstance(event, BoardCleared):
            print("\nBoard cleared. New game!")

    def _show_result(self, event: GameEnded) -> None:
        outcome = event.outcome
        print("\n" + "=" * 60)
        print("   GAME OVER!")
        print("=" * 60)

        if outcome.is_draw:
            print("\nIt's a draw! Good game!")
        elif outcome.winner == self.controller.human_mark:
            print("\nCongratulations! You won!")
        else:
            print("\nComputer wins! Better luck next time!")

        if outcome.pattern is not None:
            cells = ", ".join(str(i + 1) for i in outcome.pattern)
            print(f"Winning line: {cells}")

    def _wait_for_computer(self) -> None:
        while self.controller.state == TurnState.AI_THINKING:
            print("Computer is thinking...")
            self._turn_over.wait(timeout=self.config.THINKING_DELAY + 0.5)
            self._turn_over.clear()

    def run(self) -> None:
        while True:
            self._wait_for_computer()

            print()
            print(self.controller.board.pretty())

            if self.controller.state == TurnState.TERMINAL:
                prompt = "\n'r' to play again, 'q' to quit: "
            else:
                prompt = f"\nYour move ({self.controller.human_mark}), 1-9: "

            try:
                text = input(prompt).strip().lower()
            except EOFError:
                break

            if text == "q":
                break
            if text == "r":
                self.controller.reset()
                continue

            try:
                index = int(text) - 1
            except ValueError:
                print("Please enter a number from 1 to 9.")
                continue

            try:
                self.controller.submit_human_move(index)
            except InvalidMoveError as e:
                print(f"WARNING: {e}")

        self.controller.close()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="TicTacToe against the computer")
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default="hard",
        help="Computer strength (default: hard, never loses)"
    )
    parser.add_argument(
        "--ai-first",
        action="store_true",
        help="Let the computer move first"
    )
    parser.add_argument(
        "--human-mark",
        choices=["X", "O"],
        default=None,
        help="Mark you play (default: X if you move first, else O)"
    )
    parser.add_argument(
        "--opening",
        choices=[o.value for o in Opening],
        default=Opening.SCHEDULED.value,
        help="How the computer opens when it moves first"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=GameConfig.THINKING_DELAY,
        help="Seconds the computer thinks before each move"
    )
    parser.add_argument(
        "--fallibility",
        type=float,
        default=0.0,
        help="Chance (0-1) the medium computer skips its best scored move"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible games"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = GameConfig(
            difficulty=Difficulty[args.difficulty.upper()],
            first_mover=FirstMover.AI if args.ai_first else FirstMover.HUMAN,
            human_mark=Mark(args.human_mark) if args.human_mark else None,
            opening=Opening(args.opening),
            thinking_delay=args.delay,
            fallibility=args.fallibility,
            seed=args.seed,
        )
    except ValueError as e:
        parser.error(str(e))

    game = ConsoleGame(config)
    try:
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
        game.controller.close()
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
