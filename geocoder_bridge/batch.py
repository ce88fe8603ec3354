from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from .models import RESULT_WIRE_FIELDS, AddressResolutionResult, CoordinateQuery

logger = logging.getLogger(__name__)

COORD_COLUMNS = ("lat", "lng")


def _read_table(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".xlsx":
        return pd.read_excel(path)
    raise ValueError(f"Unsupported file type: {path.suffix}")


def read_queries(path: str | Path) -> List[CoordinateQuery]:
    p = Path(path)
    df = _read_table(p)
    missing = [c for c in COORD_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing column(s) in {p.name}: {', '.join(missing)}")

    queries: List[CoordinateQuery] = []
    for idx, row in df.iterrows():
        lat = pd.to_numeric(row["lat"], errors="coerce")
        lng = pd.to_numeric(row["lng"], errors="coerce")
        if pd.isna(lat) or pd.isna(lng):
            logger.warning("Skipping row %s: missing coordinate", idx)
            continue
        queries.append(CoordinateQuery(lat=float(lat), lng=float(lng)))
    return queries


def results_frame(
    queries: Sequence[CoordinateQuery],
    results: Sequence[AddressResolutionResult],
) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = []
    for q, r in zip(queries, results):
        row: Dict[str, Any] = {"lat": q.lat, "lng": q.lng}
        row.update(r.to_payload())
        rows.append(row)
    return pd.DataFrame(rows, columns=list(COORD_COLUMNS) + list(RESULT_WIRE_FIELDS))


def write_results(frame: pd.DataFrame, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    suffix = p.suffix.lower()
    if suffix == ".csv":
        frame.to_csv(p, index=False, encoding="utf-8")
    elif suffix == ".xlsx":
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            frame.to_excel(writer, sheet_name="results", index=False)
    else:
        raise ValueError(f"Unsupported file type: {p.suffix}")
