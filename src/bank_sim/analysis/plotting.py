# src/bank_sim/analysis/plotting.py

"""
Provides optional plotting utilities for visualizing a finished run.

This module depends on 'matplotlib' and 'seaborn', which are not part
of the core package's dependencies. They are installed via the
'[analysis]' extra:

    pip install bank-sim[analysis]

The histogram and teller-activity plots read a 'Measure' that was
attached to the simulation; the timeline plot reads the
'SimulationResult' itself.
"""

import logging
from typing import Optional

# Optional Dependency Handling
try:
    import matplotlib.pyplot as plt
    import matplotlib.axes
    import seaborn as sns
    from matplotlib.patches import Patch
    from matplotlib.ticker import MaxNLocator
except ImportError:
    log = logging.getLogger(__name__)
    log.error("Analysis dependencies (matplotlib, seaborn) not found.")
    log.error("Please install them with: pip install bank-sim[analysis]")
    raise

from ..engine import SimulationResult
from ..measure import Measure

log = logging.getLogger(__name__)

sns.set_theme(style="whitegrid")


def plot_wait_time_histogram(
    measure: Measure,
    ax: Optional[matplotlib.axes.Axes] = None,
    bins: int = 20
) -> matplotlib.axes.Axes:
    """
    Generates a histogram of customer wait times with the mean marked.

    Args:
        measure (Measure): The Measure fed by a finished simulation.
        ax (Optional[matplotlib.axes.Axes]): The Axes to draw on. If None,
            a new Figure/Axes is created.
        bins (int): The number of histogram bins.

    Returns:
        matplotlib.axes.Axes: The Axes object with the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))

    if not measure.wait_times:
        log.warning("No wait times recorded. Plotting an empty histogram.")
        ax.set_title("Wait Time Distribution (No Data)")
        return ax

    wait_stats = measure.get_final_kpis()["wait_time"]
    mean_wait = wait_stats["mean"]

    sns.histplot(measure.wait_times, bins=bins, ax=ax,
                 label="Customers")
    ax.axvline(mean_wait, color="red", linestyle="--",
               label=f"Mean Wait: {mean_wait:.2f}")

    ax.set_title("Distribution of Wait Times")
    ax.set_xlabel("Wait Time")
    ax.set_ylabel("Customers")
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))
    ax.legend()

    log.debug(f"Plotted wait time histogram (n={wait_stats['count']})")
    return ax


def plot_server_busy_over_time(
    measure: Measure,
    ax: Optional[matplotlib.axes.Axes] = None
) -> matplotlib.axes.Axes:
    """
    Generates a step plot of the teller's busy (1) / idle (0) state.

    Args:
        measure (Measure): The Measure fed by a finished simulation.
        ax (Optional[matplotlib.axes.Axes]): The Axes to draw on. If None,
            a new Figure/Axes is created.

    Returns:
        matplotlib.axes.Axes: The Axes object with the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 4))

    timeline = measure.busy_timeline()
    if len(timeline) < 2:
        log.warning("No service recorded. Plot will be empty.")
        ax.set_title("Teller Activity (No Data)")
        return ax

    # Extend the last state to the end of the run
    end_time = measure.last_update_time
    if timeline[-1][0] < end_time:
        timeline.append((end_time, timeline[-1][1]))

    times, busy = zip(*timeline)
    ax.step(times, busy, where="post")

    utilization = measure.get_final_kpis()["server_utilization"]["utilization"]
    ax.axhline(utilization, color="red", linestyle="--",
               label=f"Utilization: {utilization:.1%}")

    ax.set_title("Teller Activity Over Time")
    ax.set_xlabel("Simulation Time")
    ax.set_ylabel("Busy")
    ax.set_yticks([0, 1])
    ax.set_ylim(bottom=-0.05, top=1.1)
    ax.set_xlim(left=measure.start_time)
    ax.legend()

    log.debug("Plotted teller activity over time.")
    return ax


def plot_event_timeline(
    result: SimulationResult,
    ax: Optional[matplotlib.axes.Axes] = None
) -> matplotlib.axes.Axes:
    """
    Draws one row per customer: time spent waiting, then in service.

    Args:
        result (SimulationResult): The result of a finished simulation.
        ax (Optional[matplotlib.axes.Axes]): The Axes to draw on. If None,
            a new Figure/Axes is created.

    Returns:
        matplotlib.axes.Axes: The Axes object with the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 6))

    arrivals = result.arrivals
    if not arrivals:
        log.warning("No arrivals in result. Timeline will be empty.")
        ax.set_title("Customer Timeline (No Data)")
        return ax

    palette = sns.color_palette()
    for record in arrivals:
        service_start = record.time + record.wait
        ax.barh(record.customer, record.wait, left=record.time,
                color=palette[1], alpha=0.6)
        ax.barh(record.customer, record.departure_time - service_start,
                left=service_start, color=palette[0])

    handles = [Patch(color=palette[1], alpha=0.6, label="Waiting"),
               Patch(color=palette[0], label="In service")]

    ax.set_title("Customer Timeline")
    ax.set_xlabel("Simulation Time")
    ax.set_ylabel("Customer #")
    ax.invert_yaxis()
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))
    ax.legend(handles=handles)

    log.debug(f"Plotted timeline for {len(arrivals)} customer(s).")
    return ax


def save_run_figure(measure: Measure, result: SimulationResult, path: str):
    """Saves all three plots, stacked in one figure, to `path`."""
    fig, (ax_timeline, ax_busy, ax_wait) = plt.subplots(
        3, 1, figsize=(12, 14))
    plot_event_timeline(result, ax=ax_timeline)
    plot_server_busy_over_time(measure, ax=ax_busy)
    plot_wait_time_histogram(measure, ax=ax_wait)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    log.info(f"Run figure written to {path}")
