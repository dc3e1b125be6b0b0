"""Escape-time Mandelbrot computation with optional PGM/PPM output."""

import time
from typing import Optional

_XMIN, _XMAX = -2.5, 1.0
_YMIN, _YMAX = -1.25, 1.25


def mandelbrot(
    width: int,
    height: int,
    max_iter: int,
    dump_filename: Optional[str] = None,
) -> tuple[list[list[int]], int]:
    """Return the iteration-count map (rows of columns) and elapsed milliseconds.

    A file name ending in ``.pgm`` or ``.ppm`` also writes the map as an image.
    """
    start = time.monotonic()

    data = []
    for y in range(height):
        cy = _YMIN + (y / height) * (_YMAX - _YMIN)
        row = []
        for x in range(width):
            cx = _XMIN + (x / width) * (_XMAX - _XMIN)
            zx = zy = 0.0
            iteration = 0
            while zx * zx + zy * zy <= 4.0 and iteration < max_iter:
                zx, zy = zx * zx - zy * zy + cx, 2.0 * zx * zy + cy
                iteration += 1
            row.append(iteration)
        data.append(row)

    if dump_filename is not None:
        if dump_filename.endswith(".pgm"):
            _write_pgm(dump_filename, data, width, height, max_iter)
        elif dump_filename.endswith(".ppm"):
            _write_ppm(dump_filename, data, width, height, max_iter)

    return data, int((time.monotonic() - start) * 1000)


def _write_pgm(filename: str, data: list[list[int]], width: int, height: int, max_iter: int) -> None:
    with open(filename, "w", encoding="ascii") as fh:
        fh.write(f"P2\n{width} {height}\n{max_iter}\n")
        for row in data:
            fh.write("".join(f"{value} " for value in row))
            fh.write("\n")


def _write_ppm(filename: str, data: list[list[int]], width: int, height: int, max_iter: int) -> None:
    with open(filename, "w", encoding="ascii") as fh:
        fh.write(f"P3\n{width} {height}\n255\n")
        for row in data:
            for value in row:
                ratio = value / max_iter if max_iter else 0.0
                color = min(255, max(0, int(ratio * 255.0)))
                fh.write(f"{color} 0 {255 - color} \n")