"""
Compressibility profile plots (matplotlib, non-interactive backend).
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # non-interactive backend for CI
import matplotlib.pyplot as plt
import pandas as pd

logger = logging.getLogger(__name__)

plt.rcParams.update({
    "font.size":       10,
    "axes.titlesize":  11,
    "axes.labelsize":  10,
    "figure.dpi":      150,
    "savefig.dpi":     150,
    "savefig.bbox":    "tight",
})


def plot_compressibility_profile(df: pd.DataFrame, out_path: str,
                                 threshold: Optional[float] = None) -> str:
    """
    One panel per chromosome: ratio against window midpoint.

    Args:
        df:        Table from ``load_compressibility_table``.
        out_path:  PNG file to write.
        threshold: Optional low-complexity cut-off drawn as a dashed line.

    Returns:
        out_path
    """
    chromosomes = list(dict.fromkeys(df["Chromosome"])) or [""]
    fig, axes = plt.subplots(
        len(chromosomes), 1,
        figsize=(10, 2.2 * len(chromosomes)),
        squeeze=False, sharey=True,
    )

    for ax, chrom in zip(axes[:, 0], chromosomes):
        sub = df[df["Chromosome"] == chrom]
        midpoints = (sub["Start"] + sub["End"]) / 2
        ax.plot(midpoints, sub["Ratio"], color="#3C5488", linewidth=0.8)
        if threshold is not None:
            ax.axhline(threshold, color="#E64B35", linestyle="--", linewidth=0.8)
        ax.set_title(chrom or "(no windows)")
        ax.set_ylabel("GZIP ratio")
        ax.grid(True, linestyle="--", alpha=0.4)
    axes[-1, 0].set_xlabel("Position (bp)")

    fig.suptitle("GZIP compressibility profile", fontsize=12, fontweight="bold")
    plt.tight_layout()
    out_dir = os.path.dirname(os.path.abspath(out_path))
    os.makedirs(out_dir, exist_ok=True)
    fig.savefig(out_path)
    plt.close(fig)
    logger.info(f"Profile plot written to {out_path}")
    return out_path
