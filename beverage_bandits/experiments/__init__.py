"""Experiment orchestration: sweeps over combat parameters."""

from beverage_bandits.experiments.attack_sweep import (
    SweepResult,
    SweepTrial,
    run_attack_sweep,
    run_trial,
    write_sweep_results,
)

__all__ = [
    "SweepResult",
    "SweepTrial",
    "run_attack_sweep",
    "run_trial",
    "write_sweep_results",
]
