"""
DataMind Data - Synthetic sample dataset.

Generates a small monthly business dataset so the dashboard can be tried
without uploading a file.
"""

import numpy as np

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

SAMPLE_COLUMNS = [
    "Month",
    "Revenue",
    "Expenses",
    "Profit",
    "New_Customers",
    "Customer_Satisfaction",
    "Marketing_Spend",
]


def generate_sample_csv(seed: int | None = None, base_revenue: int = 20_000) -> str:
    """
    Build a 12-month CSV with a ~5% monthly revenue trend and +/-10% noise.

    Expenses are ~65% of revenue, marketing ~15%, satisfaction a score
    between 7.5 and 9.5.
    """
    rng = np.random.default_rng(seed)
    lines = [",".join(SAMPLE_COLUMNS)]

    for i, month in enumerate(MONTHS):
        growth = 1 + i * 0.05
        variance = (rng.random() - 0.5) * 0.2

        revenue = int(base_revenue * growth * (1 + variance))
        expenses = int(revenue * 0.65)
        profit = revenue - expenses
        customers = int(revenue / 200 + rng.random() * 20)
        satisfaction = f"{7.5 + rng.random() * 2.0:.1f}"
        marketing = int(revenue * 0.15)

        lines.append(f"{month},{revenue},{expenses},{profit},{customers},{satisfaction},{marketing}")

    return "\n".join(lines) + "\n"
