import numpy as np


def compute_energy(states, masses=None):
    if masses is None:
        masses = np.ones(states.shape[1])
    vel = states[:, :, 2:4]
    return (0.5 * masses[None, :, None] * vel ** 2).sum(axis=(1, 2))


def compute_momentum(states, masses=None):
    if masses is None:
        masses = np.ones(states.shape[1])
    vel = states[:, :, 2:4]
    p = (masses[None, :, None] * vel).sum(axis=1)
    return np.linalg.norm(p, axis=1)


def min_pair_gap(states, radii):
    """(T,) smallest centre distance minus radius sum per frame."""
    pos = states[:, :, :2]
    n = pos.shape[1]
    if n < 2:
        return np.full(pos.shape[0], np.inf)
    diff = pos[:, :, None, :] - pos[:, None, :, :]
    dist = np.linalg.norm(diff, axis=-1)
    gap = dist - (radii[:, None] + radii[None, :])[None]
    iu = np.triu_indices(n, k=1)
    return gap[:, iu[0], iu[1]].min(axis=1)


def containment_violation(states, radii, width, height):
    """(T,) largest distance any centre sits outside [r, dim - r - 1]; 0 if inside."""
    x, y = states[:, :, 0], states[:, :, 1]
    r = radii[None, :]
    excess = np.stack([
        r - x,
        x - (width - r - 1),
        r - y,
        y - (height - r - 1),
    ])
    return np.clip(excess, 0.0, None).max(axis=(0, 2))
