"""Immutable in-memory sample store.

Every derived view reads samples through :class:`SampleStore`.  The store is
backed by a pandas DataFrame with the columns ``name``, ``cpm``,
``intensity`` and ``state``; numeric columns are exposed as read-only numpy
arrays so the classification code can stay vectorised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Literal, Mapping, Sequence, Union

import numpy as np
import pandas as pd

from .config import OPTIONAL_COLUMNS, REQUIRED_COLUMNS
from .errors import SampleFormatError

Axis = Literal["cpm", "intensity"]
AXES: tuple[Axis, Axis] = ("cpm", "intensity")

_COLUMNS = [*REQUIRED_COLUMNS, *OPTIONAL_COLUMNS]


def check_axis(axis: str) -> Axis:
    """Return *axis* unchanged, or raise ``ValueError`` if it is unknown."""
    if axis not in AXES:
        raise ValueError(f"Invalid axis '{axis}'. Choose 'cpm' or 'intensity'.")
    return axis  # type: ignore[return-value]


def other_axis(axis: str) -> Axis:
    """Return the axis orthogonal to *axis*."""
    return "intensity" if check_axis(axis) == "cpm" else "cpm"


def coerce_states(values) -> pd.arrays.IntegerArray:
    """Normalise raw state labels to a nullable ``Int64`` array.

    Numbers are truncated toward zero.  Anything that is not a finite number
    within the ``int64`` range becomes missing, since the state only drives
    colouring and filtering.
    """
    numeric = pd.to_numeric(pd.Series(values), errors="coerce").astype("float64")
    numeric = np.trunc(numeric)
    numeric = numeric.where(np.isfinite(numeric) & (numeric.abs() < 2**63))
    return pd.array(numeric.to_numpy(), dtype="Int64")


@dataclass(frozen=True)
class Sample:
    """One row of the sample table."""

    name: str
    cpm: float
    intensity: float
    state: int | None = None

    def value(self, axis: str) -> float:
        return getattr(self, check_axis(axis))


class SampleStore:
    """Ordered, read-only collection of samples.

    Parameters
    ----------
    df : pd.DataFrame
        Must contain ``name``, ``cpm`` and ``intensity``; ``state`` is
        optional.  Extra columns are dropped.  The frame is normalised to
        ``str`` names, ``float64`` measurements and nullable ``Int64`` states.
    """

    def __init__(self, df: pd.DataFrame) -> None:
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise SampleFormatError(
                f"Sample table is missing required column(s): {', '.join(missing)}"
            )

        frame = pd.DataFrame(
            {
                "name": df["name"].fillna("").astype(str).to_numpy(),
                "cpm": pd.to_numeric(df["cpm"], errors="coerce").astype("float64").to_numpy(),
                "intensity": pd.to_numeric(df["intensity"], errors="coerce")
                .astype("float64")
                .to_numpy(),
            }
        )
        if "state" in df.columns:
            frame["state"] = coerce_states(df["state"])
        else:
            frame["state"] = pd.array([pd.NA] * len(frame), dtype="Int64")

        self._df = frame
        self._arrays = {}
        for axis in AXES:
            values = frame[axis].to_numpy(dtype="float64", copy=True)
            values.flags.writeable = False
            self._arrays[axis] = values

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_records(
        cls, records: Iterable[Union[Sample, Mapping[str, object]]]
    ) -> "SampleStore":
        """Build a store from :class:`Sample` objects or plain mappings."""
        rows = []
        for rec in records:
            if isinstance(rec, Sample):
                rows.append(
                    {"name": rec.name, "cpm": rec.cpm,
                     "intensity": rec.intensity, "state": rec.state}
                )
            else:
                rows.append(
                    {
                        "name": rec.get("name", ""),
                        "cpm": rec.get("cpm"),
                        "intensity": rec.get("intensity"),
                        "state": rec.get("state"),
                    }
                )
        return cls(pd.DataFrame(rows, columns=_COLUMNS))

    @classmethod
    def empty(cls) -> "SampleStore":
        return cls(pd.DataFrame(columns=_COLUMNS))

    # ------------------------------------------------------------------ #
    #  Access
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._df)

    def __iter__(self) -> Iterator[Sample]:
        for i in range(len(self._df)):
            yield self[i]

    def __getitem__(self, index: int) -> Sample:
        row = self._df.iloc[index]
        state = row["state"]
        return Sample(
            name=row["name"],
            cpm=float(row["cpm"]),
            intensity=float(row["intensity"]),
            state=None if pd.isna(state) else int(state),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleStore):
            return NotImplemented
        return self._df.equals(other._df)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SampleStore(n={len(self)})"

    def values(self, axis: str) -> np.ndarray:
        """Return the read-only ``float64`` array for *axis*."""
        return self._arrays[check_axis(axis)]

    @property
    def names(self) -> list[str]:
        return self._df["name"].tolist()

    @property
    def states(self) -> pd.Series:
        """The nullable ``Int64`` state column."""
        return self._df["state"].copy()

    def to_frame(self) -> pd.DataFrame:
        """Return a copy of the backing DataFrame."""
        return self._df.copy()

    def state_labels(self) -> list[int]:
        """Sorted distinct state labels, ignoring missing values."""
        return sorted(int(s) for s in self._df["state"].dropna().unique())

    def max_value(self, axis: str) -> float:
        """Largest finite value on *axis*, or ``0.0`` when there is none."""
        values = self.values(axis)
        finite = values[np.isfinite(values)]
        if finite.size == 0:
            return 0.0
        return float(finite.max())

    # ------------------------------------------------------------------ #
    #  Derived stores
    # ------------------------------------------------------------------ #

    def subset(self, mask: Sequence[bool] | np.ndarray) -> "SampleStore":
        """Return the samples where *mask* is true, in the original order."""
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (len(self),):
            raise ValueError(
                f"Mask of shape {mask.shape} does not match {len(self)} samples"
            )
        return SampleStore(self._df.loc[mask].reset_index(drop=True))

    def filter_states(self, states: Iterable[int] | None) -> "SampleStore":
        """Keep only samples whose state is in *states*.

        An empty or ``None`` selection keeps every sample.
        """
        wanted = list(states or [])
        if not wanted:
            return self
        mask = self._df["state"].isin(wanted).fillna(False).to_numpy(dtype=bool)
        return self.subset(mask)
