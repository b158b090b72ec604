#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Render the dashboard charts for a results file as PNG images.

Usage: generate_sample_graphs.py [results.csv]
"""

import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from analyzers import compute_grouped_average  # noqa: E402
from app.views import loss_series  # noqa: E402
from models import SourceUnavailable  # noqa: E402
from parsers import RecordLoader  # noqa: E402
from utils.logging import get_logger  # noqa: E402

logger = get_logger("training_results_viewer.charts")

# Output directory
output_dir = Path(__file__).parent


# 1. Accuracy per model (bar chart)
def create_accuracy_by_model(records, path):
    groups = compute_grouped_average(records, "accuracy").rounded(3).groups
    models = [group.model for group in groups]
    averages = [group.average for group in groups]

    fig, ax = plt.subplots(figsize=(10, 6))
    bars = ax.bar(np.arange(len(models)), averages, color="#90caf9", label="Average accuracy")
    ax.set_xticks(np.arange(len(models)))
    ax.set_xticklabels(models)

    for bar, value in zip(bars, averages):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), f"{value:.3f}",
                ha="center", va="bottom", fontsize=10)

    ax.set_title("Average Accuracy by Model", fontsize=16, fontweight='bold', pad=20)
    ax.set_xlabel('Model', fontsize=12, fontweight='bold')
    ax.set_ylabel('Accuracy', fontsize=12, fontweight='bold')
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    ax.legend()

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"✓ {path.name} created")


# 2. Loss over time (line chart)
def create_loss_over_time(records, path):
    points = loss_series(records)
    dates = [point["date"] or "" for point in points]
    losses = [np.nan if point["loss"] is None else point["loss"] for point in points]

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(np.arange(len(dates)), losses, color="#f48fb1", marker="o", linewidth=2, label="Loss")
    ax.set_xticks(np.arange(len(dates)))
    ax.set_xticklabels(dates)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right", rotation_mode="anchor")

    ax.set_title("Loss over Time", fontsize=16, fontweight='bold', pad=20)
    ax.set_xlabel('Date', fontsize=12, fontweight='bold')
    ax.set_ylabel('Loss', fontsize=12, fontweight='bold')
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend()

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"✓ {path.name} created")


def main(argv):
    source = Path(argv[1]) if len(argv) > 1 else output_dir / "datos.csv"
    outcome = RecordLoader().load(source)
    if isinstance(outcome, SourceUnavailable):
        logger.error("Results file unavailable: %s", outcome.reason)
        print(f"No data found. Make sure {source} exists.")
        return 1
    if outcome.is_empty:
        print(f"{source} contains no results rows; nothing to plot.")
        return 0

    print("Rendering charts...")
    create_accuracy_by_model(outcome.records, output_dir / "accuracy_by_model.png")
    create_loss_over_time(outcome.records, output_dir / "loss_over_time.png")
    print(f"📁 Location: {output_dir.absolute()}")
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
