# plots.py
"""
Plots of proven waste bounds.
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

from bounds import WasteBoundLedger, UNBOUNDED


def plot_waste_bounds(ledger: WasteBoundLedger, output_path: str, title: str = None) -> str:
    """
    Step plot of lower bound on waste against coverage count.

    Args:
        ledger: Ledger to plot
        output_path: PNG file to write
        title: Optional figure title

    Returns:
        Path of the saved figure
    """
    df = ledger.as_dataframe()
    finite = df[df['upper_bound'] != UNBOUNDED]

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    plt.figure(figsize=(10, 6))
    sns.set_style("whitegrid")

    plt.step(df['coverage'], df['lower_bound'], where='post', label='Lower bound', linewidth=2)
    if len(finite) > 0:
        plt.scatter(finite['coverage'], finite['upper_bound'], s=20, alpha=0.6,
                    color='tab:orange', label='Upper bound')

    plt.xlabel('Permutations covered')
    plt.ylabel('Wasted symbols')
    plt.title(title or 'Proven waste bounds', fontsize=14, pad=20)
    plt.legend()
    plt.tight_layout()
    plt.savefig(output, dpi=150)
    plt.close()

    return str(output)
