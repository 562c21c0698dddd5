"""Chart rendering helpers."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from debtsage.services.debts import DebtSnapshot, PayoffPlan
from debtsage.services.reports import build_payoff_chart


def payoff_chart_png(
    plan: PayoffPlan | None,
    *,
    debts: Sequence[DebtSnapshot] | None = None,
    currency: str = "USD",
    output_path: Path | None = None,
) -> Path:
    """Render the payoff timeline chart to PNG and return its path.

    Writes to ``output_path`` when given, otherwise to a temporary file.
    """

    fig = build_payoff_chart(plan, debts=debts, currency=currency)
    try:
        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_path, bbox_inches="tight", dpi=100)
            return output_path
        with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
            fig.savefig(tmp.name, bbox_inches="tight", dpi=100)
            return Path(tmp.name)
    finally:
        plt.close(fig)
