from __future__ import annotations

from typing import Optional, Sequence

from models.leaderboard import TeamLeaderboardEntry
from models.round import Round
from models.tour import Tour
from scoring.matchplay import DEFAULT_SIDE_A_NAME, DEFAULT_SIDE_B_NAME

from .stats import format_to_par, match_lead_progression, stableford_per_round


def _load_plt():
    try:
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for visualizations. Install it with: pip install matplotlib"
        ) from exc
    return plt


def _apply_sparse_xticks(ax, labels: Sequence[str], max_labels: int = 12) -> None:
    """Show at most `max_labels` x ticks, always keeping the last one."""
    count = len(labels)
    if count <= max_labels:
        ax.set_xticks(range(count))
        ax.set_xticklabels(labels, rotation=45, ha="right")
        return

    step = max(1, count // max_labels)
    tick_positions = list(range(0, count, step))
    if tick_positions[-1] != count - 1:
        tick_positions.append(count - 1)

    ax.set_xticks(tick_positions)
    ax.set_xticklabels([labels[i] for i in tick_positions], rotation=45, ha="right")


def plot_match_progression(
    round_obj: Round,
    match_id: str,
    side_a_name: str = DEFAULT_SIDE_A_NAME,
    side_b_name: str = DEFAULT_SIDE_B_NAME,
):
    """
    Step chart of a match's running lead.

    Above zero side A is up, below zero side B is up. Each point is
    annotated with the match status as of that hole.
    """
    plt = _load_plt()
    rows = match_lead_progression(round_obj, match_id, side_a_name, side_b_name)
    holes = [row["hole_number"] for row in rows]
    leads = [row["lead"] for row in rows]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.axhline(0, color="gray", linewidth=1)
    if rows:
        ax.step(holes, leads, where="mid", color="black", linewidth=1.5)
        ax.scatter(holes, leads, color=["tab:blue" if v > 0 else "tab:red" if v < 0 else "gray" for v in leads])
        for row in rows:
            ax.annotate(row["status"], (row["hole_number"], row["lead"]),
                        textcoords="offset points", xytext=(0, 8), ha="center", fontsize=7)
    ax.set_title(f"{side_a_name} vs {side_b_name}")
    ax.set_xlabel("Hole")
    ax.set_ylabel(f"Holes up ({side_a_name} +)")
    ax.set_xlim(0.5, max(round_obj.hole_count, max(holes, default=1)) + 0.5)
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_team_leaderboard(entries: Sequence[TeamLeaderboardEntry], use_net: bool = False):
    """Horizontal bars of each team's score to par, leader on top. Ryder Cup points are labelled when present."""
    plt = _load_plt()
    names = [entry.team.name for entry in entries]
    values = []
    for entry in entries:
        if use_net and entry.net_to_par is not None:
            values.append(entry.net_to_par)
        else:
            values.append(entry.total_to_par)

    fig, ax = plt.subplots(figsize=(9, max(3, 0.6 * len(entries) + 1)))
    y = list(range(len(entries)))
    colors = [entry.team.color or "tab:green" for entry in entries]
    ax.barh(y, values, color=colors)
    ax.set_yticks(y)
    ax.set_yticklabels(names)
    ax.invert_yaxis()
    ax.axvline(0, color="gray", linewidth=1)

    for position, (entry, value) in enumerate(zip(entries, values)):
        label = format_to_par(value)
        if entry.ryder_cup_points is not None:
            label = f"{label}  ({entry.ryder_cup_points:g} pts)"
        ax.annotate(label, (value, position), textcoords="offset points",
                    xytext=(4 if value >= 0 else -4, 0), ha="left" if value >= 0 else "right", va="center")

    ax.set_title("Team Leaderboard (Net)" if use_net else "Team Leaderboard")
    ax.set_xlabel("To Par")
    ax.grid(axis="x", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_stableford_per_round(tour: Tour, player_id: str, labels: Optional[Sequence[str]] = None):
    """Bar chart: Stableford points per completed round, with the running total as a line."""
    plt = _load_plt()
    rows = stableford_per_round(tour, player_id)
    if labels is not None:
        x_labels = list(labels)
    else:
        x_labels = [row["round_name"] or f"R{row['round_index']}" for row in rows]
    x = list(range(len(x_labels)))
    points = [row["points"] for row in rows]

    running = []
    total = 0
    for value in points:
        total += value
        running.append(total)

    fig, ax1 = plt.subplots(figsize=(10, 5))
    ax1.bar(x, points, alpha=0.8, label="Points")
    ax1.set_title("Stableford Points Per Round")
    ax1.set_xlabel("Round")
    ax1.set_ylabel("Points")
    _apply_sparse_xticks(ax1, x_labels)
    ax1.grid(axis="y", alpha=0.2)

    ax2 = ax1.twinx()
    ax2.plot(x, running, color="black", marker="o", linewidth=1.5, label="Running Total")
    ax2.set_ylabel("Running Total")

    lines1, labels1 = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax1.legend(lines1 + lines2, labels1 + labels2, loc="upper left")

    fig.tight_layout()
    return fig, ax1, ax2
