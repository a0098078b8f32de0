"""Result dataclasses for simulation outputs."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class AccrualSimulationResult:
    """Results from a Monte Carlo interaction-cadence simulation.

    Attributes:
        balance_paths: (n_paths, n_steps) array of effective balance over time.
        terminal_balance: (n_paths,) array of final balance per path.
        interaction_counts: (n_paths,) number of materializing interactions.
        linear_terminal: Final balance had the account never been touched.
        timesteps: (n_steps,) array of time in days.
    """

    balance_paths: np.ndarray
    terminal_balance: np.ndarray
    interaction_counts: np.ndarray
    linear_terminal: float
    timesteps: np.ndarray

    @property
    def compounding_gain(self) -> np.ndarray:
        """Per-path excess over the never-touched linear balance."""
        return self.terminal_balance - self.linear_terminal
