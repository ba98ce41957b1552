"""
rating_curve.py
Plots the distance-to-rating curve for the current tunables, to help pick
NormAdjMidpoint and NormAdjCurl.
"""
import matplotlib.pyplot as plt
import numpy as np
from .evidence import rating_of

N_POINTS = 500


def rating_curve(tunables, max_distance=None, n_points=N_POINTS):
    """Distances from 0 to max_distance (default 4 x midpoint) and their ratings."""
    if max_distance is None:
        max_distance = 4.0 * tunables.midpoint
    distances = np.linspace(0.0, max_distance, n_points)
    return distances, rating_of(distances, tunables.midpoint, tunables.curl)


def plot_rating_curve(tunables, max_distance=None, save_path=None, show=True, compare_curls=(1.0, 2.0, 3.0)):
    distances, ratings = rating_curve(tunables, max_distance)
    fig, ax = plt.subplots(figsize=(8, 4))
    for curl in compare_curls:
        if curl == tunables.curl:
            continue
        ax.plot(distances, rating_of(distances, tunables.midpoint, curl), linestyle='--', alpha=0.5, label=f'curl={curl:g}')
    ax.plot(distances, ratings, linewidth=2, label=f'curl={tunables.curl:g} (current)')
    ax.axvline(tunables.midpoint, color='red', linestyle=':', label=f'midpoint={tunables.midpoint:g}')
    ax.axhline(0.5, color='gray', linewidth=0.5)
    ax.set_xlabel('Distance')
    ax.set_ylabel('Rating (0 = best)')
    ax.set_ylim(0.0, 1.0)
    ax.set_title('Norm Match Rating vs Distance')
    ax.legend()
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
    if show:
        plt.show()
    return fig
