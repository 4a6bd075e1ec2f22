"""Reading sample tables and writing classification results.

Handles the tab-separated upload format (``name``, ``cpm``, ``intensity``
and an optional ``state`` column) and the ``name``/``state`` quadrant export.
"""

from __future__ import annotations

import base64
import binascii
import logging
from io import StringIO
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .classification import quadrant_codes
from .config import EXPORT_COLUMNS, REQUIRED_COLUMNS
from .errors import SampleFormatError
from .samples import SampleStore, coerce_states

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_samples_text(text: str, *, drop_invalid: bool = False) -> SampleStore:
    """Parse tab-separated sample text into a :class:`SampleStore`.

    Parameters
    ----------
    text : str
        Header line followed by one sample per line.  Blank lines are
        skipped; headers and values are whitespace-trimmed.
    drop_invalid : bool
        If ``True``, rows whose ``cpm`` or ``intensity`` is not a number are
        dropped.  By default they are kept with NaN values.

    Returns
    -------
    SampleStore

    Raises
    ------
    SampleFormatError
        If the text is empty or a required column is missing.
    """
    if not text or not text.strip():
        raise SampleFormatError("Sample table is empty")

    try:
        raw = pd.read_csv(
            StringIO(text),
            sep="\t",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise SampleFormatError("Sample table is empty") from exc
    except pd.errors.ParserError as exc:
        raise SampleFormatError(f"Could not parse sample table: {exc}") from exc

    raw.columns = [str(c).strip() for c in raw.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in raw.columns]
    if missing:
        raise SampleFormatError(
            f"Sample table is missing required column(s): {', '.join(missing)}"
        )

    raw = raw.apply(lambda col: col.str.strip())
    # whitespace-only lines survive skip_blank_lines as rows of empty fields
    raw = raw[~(raw.fillna("") == "").all(axis=1)]

    df = pd.DataFrame(
        {
            "name": raw["name"].fillna(""),
            "cpm": pd.to_numeric(raw["cpm"], errors="coerce"),
            "intensity": pd.to_numeric(raw["intensity"], errors="coerce"),
        }
    )
    if "state" in raw.columns:
        df["state"] = coerce_states(raw["state"])

    invalid = df["cpm"].isna() | df["intensity"].isna()
    n_invalid = int(invalid.sum())
    if n_invalid:
        if drop_invalid:
            logger.warning("Dropped %d row(s) with non-numeric cpm/intensity", n_invalid)
            df = df[~invalid]
        else:
            logger.warning(
                "%d row(s) have non-numeric cpm/intensity and are kept as NaN", n_invalid
            )

    return SampleStore(df.reset_index(drop=True))


def read_samples(path: PathLike, *, drop_invalid: bool = False) -> SampleStore:
    """Load a sample table from a ``.tsv``/``.txt`` file."""
    text = Path(path).read_text(encoding="utf-8")
    store = parse_samples_text(text, drop_invalid=drop_invalid)
    logger.info("Loaded %d samples from %s", len(store), path)
    return store


def decode_upload(contents: str) -> str:
    """Decode a browser upload (``data:<mime>;base64,<payload>``) to text.

    Raises
    ------
    SampleFormatError
        If the payload is not valid base64-encoded UTF-8.
    """
    _, _, payload = contents.partition(",")
    try:
        return base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise SampleFormatError(f"Could not decode uploaded file: {exc}") from exc


def classification_table(store: SampleStore, threshold) -> pd.DataFrame:
    """Quadrant code of every sample relative to *threshold*.

    Codes are ``1`` (TP), ``2`` (FP), ``3`` (TN) and ``4`` (FN), in store
    order.
    """
    return pd.DataFrame(
        {
            EXPORT_COLUMNS[0]: store.names,
            EXPORT_COLUMNS[1]: quadrant_codes(store, threshold),
        },
        columns=list(EXPORT_COLUMNS),
    )


def export_classification(store: SampleStore, threshold) -> Optional[str]:
    """Render the classification table as TSV text.

    Returns ``None`` when no threshold is set.
    """
    if threshold is None:
        return None
    table = classification_table(store, threshold)
    lines = ["\t".join(EXPORT_COLUMNS)]
    lines.extend(f"{name}\t{code}" for name, code in table.itertuples(index=False))
    return "\n".join(lines)


def write_classification(path: PathLike, store: SampleStore, threshold) -> bool:
    """Write the classification TSV to *path*.

    Nothing is written when no threshold is set; returns whether a file was
    written.
    """
    text = export_classification(store, threshold)
    if text is None:
        logger.info("No threshold set, skipping export to %s", path)
        return False
    Path(path).write_text(text, encoding="utf-8")
    logger.info("Wrote classification of %d samples to %s", len(store), path)
    return True
