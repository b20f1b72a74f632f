"""
env.py - Gymnasium environment over the Connect Four engine

ConnectFourEnv lets scripts and simulations play the engine headlessly.
Both players act through step(); the environment does not supply an
opponent.
"""

from typing import Dict, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.game.rules import MoveResult, drop_piece, get_winning_line, new_game
from dropfour.utils import HEIGHT, WIDTH, GameResult, Player

# RGB colours used by the rgb_array render mode
CELL_PIXELS = 50
BACKGROUND_RGB = (0, 0, 128)
PIECE_RGB = {
    Player.EMPTY: (0, 0, 0),
    Player.ONE: (255, 0, 0),
    Player.TWO: (255, 255, 0),
}


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Rewards are from player one's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 height: int = HEIGHT, width: int = WIDTH):
        """
        Initialize the environment.

        Args:
            render_mode: One of metadata['render_modes'], or None
            height: Board rows
            width: Board columns
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.height = height
        self.width = width
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(height, width), dtype=np.int8
        )

        self.state = new_game(height, width)
        self.last_result: Optional[MoveResult] = None

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_tie = 0.0
        self.reward_invalid_move = -0.5
        self.reward_step = 0.0

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.state = new_game(self.height, self.width)
        self.last_result = None

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the player whose turn it is.

        Args:
            action: Column index

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)

        Raises:
            OutOfBoundsError: If action is not a column of the board
        """
        result = drop_piece(self.state, int(action))
        self.last_result = result

        if not result.accepted:
            debug.warning(f"Rejected action {action}: {result.rejection.value}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.state = result.state
        reward = self.reward_step
        terminated = False

        if result.result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
            terminated = True
        elif result.result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
            terminated = True
        elif result.result == GameResult.TIE:
            reward = self.reward_tie
            terminated = True

        if terminated:
            debug.info(f"Episode over: {result.result.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current board.

        Returns:
            A string for 'ascii', an RGB array for 'rgb_array', else None
        """
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.state.board.render()

        if self.render_mode == "human":
            print(self.state.board.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        size = CELL_PIXELS
        frame = np.empty((self.height * size, self.width * size, 3), dtype=np.uint8)
        frame[:, :] = BACKGROUND_RGB

        # One disc mask reused for every cell
        yy, xx = np.mgrid[0:size, 0:size]
        centre = size // 2
        disc = (yy - centre) ** 2 + (xx - centre) ** 2 <= (size * 2 // 5) ** 2

        for row in range(self.height):
            for col in range(self.width):
                cell = frame[row * size:(row + 1) * size, col * size:(col + 1) * size]
                cell[disc] = PIECE_RGB[Player(int(self.state.board.grid[row, col]))]

        return frame

    def _get_observation(self) -> np.ndarray:
        return self.state.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict:
        """
        Get additional information about the current state.

        Returns:
            Dictionary with info about the current state
        """
        board = self.state.board
        winner = self.state.result.winner
        valid_moves = [] if self.state.is_game_over() else board.valid_columns()

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.state.current_player.value,
            'game_result': self.state.result.name,
            'moves_made': board.count_pieces(),
            'last_move': self.state.last_move,
            'landing_row': self.last_result.landing_row if self.last_result else None,
            'winning_line': get_winning_line(board, winner) if winner else [],
        }

    def close(self):
        pass
