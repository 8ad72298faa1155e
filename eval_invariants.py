"""
Conservation check: run the event-driven stepper over several seeds.

Metrics:
  1. Energy drift (total KE, relative to t=0)
  2. Total |p| (walls exchange momentum, so it is reported, not asserted)
  3. Smallest pair gap (must stay >= 0 up to rounding)
  4. Largest excursion outside [r, dim - r - 1] (must stay 0)
"""

import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

import ballsim as B
from ballsim.config import SimConfig
from ballsim.metrics import (compute_energy, compute_momentum,
                             containment_violation, min_pair_gap)
from ballsim.stepper import generate_trajectory


def evaluate(n_seeds=5, n_frames=600):
    config = SimConfig(width=800, height=600, n_balls=15, radius_range=(15, 40))
    results = []

    print(f"Evaluating {n_seeds} seeds × {n_frames} frames "
          f"({config.n_balls} balls, {config.width}x{config.height})...")
    for k in range(n_seeds):
        traj = generate_trajectory(config, n_frames=n_frames, seed=B.SEED + k)
        full = traj['full_states']
        radii = full[0, :, 4]
        masses = full[0, :, 5]

        energy = compute_energy(traj['states'], masses)
        momentum = compute_momentum(traj['states'], masses)
        gaps = min_pair_gap(traj['states'], radii)
        excess = containment_violation(traj['states'], radii, config.width, config.height)

        drift = np.abs(energy - energy[0]).max() / energy[0]
        results.append((energy, momentum, gaps))
        print(f"  seed {B.SEED + k}: {len(traj['collisions']):5d} events  "
              f"max |ΔE/E₀| {drift:.2e}  min gap {gaps.min():+.2e}  "
              f"max excursion {excess.max():.2e}")

    os.makedirs('results/plots', exist_ok=True)
    t = np.arange(n_frames + 1) / config.fps

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    for k, (energy, momentum, gaps) in enumerate(results):
        axes[0].plot(t, (energy - energy[0]) / energy[0], label=f'seed {B.SEED + k}')
        axes[1].plot(t, momentum)
        axes[2].plot(t, gaps)
    axes[0].set_title('Relative energy drift')
    axes[1].set_title('Total |p|')
    axes[2].set_title('Smallest pair gap (px)')
    axes[2].axhline(0.0, color='k', linestyle='--', linewidth=0.8)
    for ax in axes:
        ax.set_xlabel('time (s)')
        ax.grid(True, alpha=0.3)
    axes[0].legend()
    plt.tight_layout()
    plt.savefig('results/plots/invariants.png', dpi=150)
    plt.close()

    print("\nPlot saved:")
    print("  results/plots/invariants.png")


if __name__ == '__main__':
    evaluate()
