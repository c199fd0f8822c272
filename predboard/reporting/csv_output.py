"""CSV output helpers."""

from pathlib import Path

import pandas as pd


def write_table_csv(frame: pd.DataFrame, output_path: str) -> str:
    """Write a report table to CSV, creating parent directories."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if frame.empty and not len(frame.columns):
        path.write_text("", encoding="utf-8")
        return str(path)

    frame.to_csv(path, index=False, encoding="utf-8")
    return str(path)
