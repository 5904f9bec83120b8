"""
services/chart_service.py
--------------------------
Renders the chart data produced by the projections into PNG images.
Uses matplotlib to draw grouped bar and donut charts and returns them as
BytesIO buffers.

Accepted shapes:
    bar: {"labels": [...], "datasets": [{"label": str, "data": [...]}, ...]}
    pie: {"labels": [...], "values": [...]}
"""

import io

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for server use
import matplotlib.pyplot as plt

from config import DEFAULT_CURRENCY
from utils.logger import get_logger

logger = get_logger(__name__)

plt.rcParams["font.family"] = "DejaVu Sans"
plt.rcParams["figure.facecolor"] = "#1a1a2e"
plt.rcParams["text.color"] = "#e0e0e0"
plt.rcParams["axes.facecolor"] = "#1a1a2e"

# One color per dataset: Ingresos, Préstamos/Gastos, Tarjetas, Ahorro
_SERIES_COLORS = ["#4ECDC4", "#FF6B6B", "#F7DC6F", "#96CEB4", "#BB8FCE", "#85C1E9"]

_PIE_COLORS = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4",
    "#FFEAA7", "#DDA0DD", "#98D8C8", "#F7DC6F",
    "#BB8FCE", "#85C1E9", "#F1948A", "#82E0AA",
    "#F8C471", "#AED6F1", "#D2B4DE", "#A3E4D7",
]


def _to_png(fig) -> io.BytesIO:
    plt.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    buf.seek(0)
    plt.close(fig)
    return buf


class ChartService:
    """Generates chart images from projection chart data."""

    def render_bar(self, chart_data: dict, title: str) -> io.BytesIO | None:
        """
        Draw one group of bars per label, one bar per dataset.

        Returns:
            BytesIO buffer with PNG image, or None if there are no labels.
        """
        labels = chart_data.get("labels") or []
        datasets = chart_data.get("datasets") or []
        if not labels or not datasets:
            return None

        count = len(datasets)
        width = 0.8 / count
        fig, ax = plt.subplots(figsize=(10, 5))

        for i, dataset in enumerate(datasets):
            offsets = [x - 0.4 + width * (i + 0.5) for x in range(len(labels))]
            ax.bar(
                offsets, dataset["data"],
                width=width,
                label=dataset["label"],
                color=_SERIES_COLORS[i % len(_SERIES_COLORS)],
                edgecolor="#1a1a2e",
                linewidth=1,
                zorder=3,
            )

        ax.set_xticks(range(len(labels)))
        ax.set_xticklabels(labels, fontsize=9, color="#e0e0e0")
        ax.set_ylabel(f"Monto ({DEFAULT_CURRENCY})", fontsize=11, color="#e0e0e0")
        ax.set_title(title, fontsize=13, fontweight="bold", pad=15)
        ax.legend(frameon=False, fontsize=9, labelcolor="#e0e0e0")

        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.spines["left"].set_color("#444")
        ax.spines["bottom"].set_color("#444")
        ax.tick_params(colors="#e0e0e0")
        ax.grid(axis="y", alpha=0.2, color="#888")
        ax.set_axisbelow(True)

        buf = _to_png(fig)
        logger.info(f"Rendered bar chart '{title}' ({len(labels)} groups, {count} series)")
        return buf

    def render_pie(self, chart_data: dict, title: str) -> io.BytesIO | None:
        """
        Draw a donut chart with a legend of label: amount.

        Wedges cannot be negative, so slices with a total of zero or less
        (categories dominated by refunds) are left out of the drawing.

        Returns:
            BytesIO buffer with PNG image, or None if no slice is positive.
        """
        slices = [
            (label, value)
            for label, value in zip(chart_data.get("labels") or [], chart_data.get("values") or [])
            if value > 0
        ]
        if not slices:
            return None
        labels = [label for label, _ in slices]
        values = [value for _, value in slices]

        fig, ax = plt.subplots(figsize=(8, 6))

        wedges, _, autotexts = ax.pie(
            values,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%",
            colors=[_PIE_COLORS[i % len(_PIE_COLORS)] for i in range(len(values))],
            startangle=90,
            pctdistance=0.82,
            wedgeprops=dict(width=0.5, edgecolor="#1a1a2e", linewidth=2),
        )

        for autotext in autotexts:
            autotext.set_color("white")
            autotext.set_fontsize(10)
            autotext.set_fontweight("bold")

        ax.legend(
            wedges, [f"{l}: {v:,.2f}" for l, v in zip(labels, values)],
            loc="center left",
            bbox_to_anchor=(1, 0, 0.5, 1),
            fontsize=10,
            frameon=False,
        )
        ax.set_title(title, fontsize=14, fontweight="bold", pad=20)

        buf = _to_png(fig)
        logger.info(f"Rendered pie chart '{title}' ({len(values)} slices)")
        return buf
