"""Sorting files of integers with merge sort or quicksort."""

import heapq
import os
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

_INT_RE = re.compile(r"[+-]?[0-9]+")
_I64_MIN, _I64_MAX = -(2**63), 2**63 - 1
_ALGORITHMS = ("merge", "quick")


@dataclass(frozen=True)
class SortResult:
    output_file: Path
    count: int
    elapsed_ms: int


def _parse_i64(text: str):
    text = text.strip()
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    return value if _I64_MIN <= value <= _I64_MAX else None


def _read_numbers(path: Path) -> list[int]:
    numbers = []
    with path.open("rb") as fh:
        for raw in fh:
            value = _parse_i64(raw.decode("utf-8"))
            if value is not None:
                numbers.append(value)
    return numbers


def merge_sort(values: Iterable[int]) -> list[int]:
    """Return a new list with ``values`` sorted by a stable merge sort."""
    items = list(values)
    if len(items) <= 1:
        return items
    mid = len(items) // 2
    return list(heapq.merge(merge_sort(items[:mid]), merge_sort(items[mid:])))


def quick_sort(values: Iterable[int]) -> list[int]:
    """Return a new list with ``values`` sorted by quicksort (last-element pivot)."""
    arr = list(values)
    stack = [(0, len(arr))]
    while stack:
        lo, hi = stack.pop()
        if hi - lo <= 1:
            continue
        pivot = arr[hi - 1]
        i = lo
        for j in range(lo, hi - 1):
            if arr[j] <= pivot:
                arr[i], arr[j] = arr[j], arr[i]
                i += 1
        arr[i], arr[hi - 1] = arr[hi - 1], arr[i]
        stack.append((lo, i))
        stack.append((i + 1, hi))
    return arr


def sort_file(name: str, algo: str) -> SortResult:
    """Sort the integers of a stored file into ``<name>_sorted_<algo>``.

    Lines that are not integers are skipped. Raises OSError if the file cannot
    be read and ValueError for an unknown algorithm.
    """
    path = Path(os.environ.get("FILE_STORAGE_PATH", "./data/files")) / name
    numbers = _read_numbers(path)

    if algo not in _ALGORITHMS:
        raise ValueError("Unknown algorithm")

    start = time.monotonic()
    ordered = merge_sort(numbers) if algo == "merge" else quick_sort(numbers)
    elapsed = int((time.monotonic() - start) * 1000)

    out_path = path.parent / f"{name}_sorted_{algo}"
    with out_path.open("w", encoding="utf-8", newline="\n") as fh:
        fh.writelines(f"{n}\n" for n in ordered)

    return SortResult(output_file=out_path, count=len(ordered), elapsed_ms=elapsed)