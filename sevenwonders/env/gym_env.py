from __future__ import annotations

from typing import Dict, Optional, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from sevenwonders.core import (
    PYRAMID,
    BoardLayout,
    GameResult,
    GameState,
    VariantConfig,
    action_space_size,
    choose_move,
    decode_action,
    legal_action_mask,
    new_game,
    select_cell,
)
from sevenwonders.features import AUX_VECTOR_SIZE, board_channels, build_aux_vector, build_board_tensor


class PyramidEnv(gym.Env):
    """One env step is one full turn: pick a stone and its destination."""

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        variant: Union[VariantConfig, BoardLayout] = PYRAMID,
        max_ply: int = 400,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._layout = variant if isinstance(variant, BoardLayout) else BoardLayout(variant)
        self._max_ply = max_ply
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        ref = self._layout.reference_size
        board_shape = (board_channels(self._layout.num_levels), ref, ref)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(action_space_size(self._layout))

        self._state: GameState = new_game(self._layout)

    @property
    def state(self) -> GameState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        if options:
            self._max_ply = options.get("max_ply", self._max_ply)
        self._state = new_game(self._layout)
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        legal_mask = legal_action_mask(self._state)
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        origin, destination = decode_action(self._layout, int(action_index))
        rejection = None
        selected = select_cell(self._state, *origin)
        if selected.ok:
            moved = choose_move(selected.state, *destination)
            if moved.outcome is not None:
                self._state = moved.state
            else:
                rejection = moved.rejection.value if moved.rejection else "invalid_move_target"
        else:
            rejection = selected.rejection.value

        observation = self._build_observation()
        info = self._build_info()
        if rejection is not None:
            info["rejection"] = rejection

        terminated = self._state.result != GameResult.ONGOING
        stuck = not terminated and not info["legal_action_mask"].any()
        truncated = not terminated and (self._state.ply_count >= self._max_ply or stuck)
        return observation, self._compute_reward(self._state.result), terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        return legal_action_mask(self._state)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._state.board.render()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._state), "aux": build_aux_vector(self._state)}

    def _build_info(self) -> Dict:
        return {"legal_action_mask": self.legal_action_mask()}

    def _compute_reward(self, result: GameResult) -> float:
        if result == GameResult.WHITE_WIN:
            return 1.0
        if result == GameResult.BLACK_WIN:
            return -1.0
        return 0.0
