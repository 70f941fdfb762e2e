"""Normalize feed outputs into a canonical long-form schema and into records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import numpy as np
import pandas as pd

from ..domain import Sample, SymbolRecord
from ..utils import EmptySeriesError

logger = logging.getLogger(__name__)

RAW_FIELD_NAMES = {"Close", "Adj Close", "Volume", "Open", "High", "Low"}
CANONICAL_COLUMNS = ["date", "symbol", "price", "high"]


def empty_samples_frame() -> pd.DataFrame:
    """Return an empty canonical frame."""
    return pd.DataFrame(columns=CANONICAL_COLUMNS)


def parse_decimal(values: pd.Series) -> pd.Series:
    """Parse numbers that may use a decimal comma, e.g. ``"101,5"``."""
    text = values.astype(str).str.strip().str.strip('"').str.replace(",", ".", n=1, regex=False)
    return pd.to_numeric(text, errors="coerce")


def normalize_csv_frame(raw: pd.DataFrame) -> pd.DataFrame:
    """Map a ``symbol, date, price, high`` sheet (header already consumed) to canonical form."""
    if raw is None or raw.empty or raw.shape[1] < 4:
        return empty_samples_frame()

    working = raw.iloc[:, :4].copy()
    working.columns = ["symbol", "date", "price", "high"]
    working["symbol"] = working["symbol"].astype(str).str.strip().str.upper()
    working["date"] = pd.to_datetime(working["date"].astype(str).str.strip(), errors="coerce")
    working["price"] = parse_decimal(working["price"])
    working["high"] = parse_decimal(working["high"])

    return _finalize(working)


def normalize_yfinance_frame(raw: pd.DataFrame, symbols: Iterable[str]) -> pd.DataFrame:
    """Convert a raw yfinance download (single or multi ticker) to canonical form."""
    if raw is None or raw.empty:
        return empty_samples_frame()

    symbols_list = list(symbols)
    df = _ensure_tickers_first(raw)

    if isinstance(df.columns, pd.MultiIndex):
        frames = [_normalize_single_ticker(df[ticker], str(ticker)) for ticker in df.columns.get_level_values(0).unique()]
        normalized = pd.concat(frames, ignore_index=True)
    else:
        inferred = symbols_list[0] if symbols_list else "TICKER"
        normalized = _normalize_single_ticker(df, inferred)

    return _finalize(normalized)


def normalize_history_frame(raw: pd.DataFrame, symbol: str) -> pd.DataFrame:
    """Convert a ``Ticker.history`` frame to canonical form."""
    if raw is None or raw.empty:
        return empty_samples_frame()
    return _finalize(_normalize_single_ticker(raw, symbol))


def _ensure_tickers_first(df: pd.DataFrame) -> pd.DataFrame:
    if not isinstance(df.columns, pd.MultiIndex):
        return df

    fields_in_level0 = _has_raw_field(df.columns.get_level_values(0))
    fields_in_level1 = _has_raw_field(df.columns.get_level_values(1))

    if fields_in_level0 and not fields_in_level1:
        return df.swaplevel(0, 1, axis=1)
    return df


def _has_raw_field(level: Any) -> bool:
    try:
        return bool(set(level) & RAW_FIELD_NAMES)
    except TypeError:
        return False


def _normalize_single_ticker(frame: pd.DataFrame, symbol: str) -> pd.DataFrame:
    if isinstance(frame, pd.Series):
        frame = frame.to_frame()

    working = frame.rename(columns={"Close": "price", "Close*": "price", "High": "high"})
    for missing in ("price", "high"):
        if missing not in working.columns:
            working[missing] = np.nan

    working = working[["price", "high"]].reset_index()
    working = working.rename(columns={working.columns[0]: "date"})
    working["symbol"] = symbol.upper()
    return working


def _finalize(frame: pd.DataFrame) -> pd.DataFrame:
    """Drop unusable rows and order by symbol appearance, then date."""
    if frame.empty:
        return empty_samples_frame()

    frame = frame.copy()
    dates = pd.to_datetime(frame["date"], errors="coerce")
    if getattr(dates.dt, "tz", None) is not None:
        dates = dates.dt.tz_localize(None)
    frame["date"] = dates.dt.normalize()
    frame["price"] = pd.to_numeric(frame["price"], errors="coerce")
    frame["high"] = pd.to_numeric(frame["high"], errors="coerce")

    values = frame[["price", "high"]].to_numpy(dtype=float)
    usable = np.isfinite(values).all(axis=1) & (values[:, 1] >= 0) & frame["date"].notna().to_numpy()
    symbols = frame["symbol"].fillna("").astype(str).str.strip()
    usable &= (symbols != "").to_numpy(dtype=bool)
    dropped = int((~usable).sum())
    if dropped:
        logger.debug("Dropped %d rows with missing date, price or high", dropped)

    frame = frame.loc[usable, CANONICAL_COLUMNS]
    # Symbols keep their first-appearance order; dates sort stably within each.
    order = pd.Series(pd.factorize(frame["symbol"])[0], index=frame.index)
    frame = frame.assign(_order=order).sort_values(["_order", "date"], kind="mergesort")
    return frame.drop(columns="_order").reset_index(drop=True)


def frame_to_records(frame: pd.DataFrame) -> list[SymbolRecord]:
    """Group a canonical frame into one record per symbol, in first-appearance order."""
    if frame.empty:
        return []

    records = []
    for symbol in pd.unique(frame["symbol"]):
        rows = frame[frame["symbol"] == symbol]
        samples = [
            Sample(date=ts.date(), price=float(price), high=float(high))
            for ts, price, high in zip(rows["date"], rows["price"], rows["high"])
        ]
        try:
            records.append(SymbolRecord.from_samples(str(symbol), samples))
        except EmptySeriesError:
            logger.warning("Skipping %s: no valid samples", symbol)
    return records
