from __future__ import annotations

import string
from dataclasses import dataclass

from domain.models import NumberingConfig

ALPHABET = string.ascii_uppercase

_DEFAULT_NUMBERING = NumberingConfig()


@dataclass(frozen=True)
class AxisLabels:
    row_label: str
    col_label: str


def alpha_label(index: int) -> str:
    """Bijective base-26 row name: 0 -> A, 25 -> Z, 26 -> AA, 27 -> AB."""
    label = ""
    num = index
    while True:
        label = ALPHABET[num % 26] + label
        num = num // 26 - 1
        if num < 0:
            return label


def generate_label(
    row: int,
    col: int,
    config: NumberingConfig | None = None,
    label_prefix: str | None = None,
    cols: int | None = None,
) -> str:
    """Label for a grid cell.

    ``snake`` and ``index`` number cells continuously across rows, so they need
    the total column count of the grid; calling them without ``cols`` is a
    programming error rather than something to paper over.
    """
    numbering = config or _DEFAULT_NUMBERING
    scheme = numbering.scheme
    start_index = numbering.start_index
    col_number = col + numbering.col_start

    if scheme == "row-col":
        return f"{_row_col_row_label(row, numbering, label_prefix)}{col_number}"
    if scheme == "alpha-rows":
        return f"{_alpha_rows_row_label(row, numbering)}{col_number}"
    if scheme == "snake":
        total_cols = _require_cols(scheme, cols)
        offset = col if row % 2 == 0 else total_cols - 1 - col
        index = row * total_cols + offset + start_index
        return f"{label_prefix}{index}" if label_prefix else str(index)
    if scheme == "index":
        total_cols = _require_cols(scheme, cols)
        return str(row * total_cols + col + start_index)
    msg = f"Unsupported numbering scheme: {scheme}"
    raise ValueError(msg)


def generate_angular_label(
    index: int,
    config: NumberingConfig | None = None,
    label_prefix: str | None = None,
) -> str:
    numbering = config or _DEFAULT_NUMBERING
    number = index + numbering.start_index
    return f"{label_prefix}{number}" if label_prefix else str(number)


def compute_axis_labels(
    row: int,
    col: int,
    config: NumberingConfig | None = None,
    label_prefix: str | None = None,
) -> AxisLabels:
    numbering = config or _DEFAULT_NUMBERING
    if numbering.scheme == "alpha-rows":
        row_label = _alpha_rows_row_label(row, numbering)
    else:
        row_label = _row_col_row_label(row, numbering, label_prefix)
    return AxisLabels(row_label=row_label, col_label=str(col + numbering.col_start))


def _custom_row_label(row: int, numbering: NumberingConfig) -> str | None:
    labels = numbering.row_labels or []
    if 0 <= row < len(labels) and labels[row]:
        return labels[row]
    return None


def _row_col_row_label(row: int, numbering: NumberingConfig, label_prefix: str | None) -> str:
    custom = _custom_row_label(row, numbering)
    if custom:
        return custom
    if label_prefix:
        return f"{label_prefix}{row + numbering.start_index}"
    return alpha_label(row)


def _alpha_rows_row_label(row: int, numbering: NumberingConfig) -> str:
    return _custom_row_label(row, numbering) or alpha_label(row)


def _require_cols(scheme: str, cols: int | None) -> int:
    if cols is None:
        msg = f"Numbering scheme '{scheme}' requires the total column count"
        raise ValueError(msg)
    return cols
