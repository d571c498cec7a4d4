#!/usr/bin/env python3
"""
Color Guesser - find a shown color on a hue/saturation map.

Each game has five rounds. A solid color is shown and the player clicks
(or drags and confirms on touch screens) the point of the heatmap they
believe matches it. Closer guesses earn more points, and the best ten
games are kept on a local leaderboard.
"""

import logging

from colorguess.game_state import Game


def main():
    """Entry point for the game."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    game = Game()
    game.run()


if __name__ == "__main__":
    main()
