from jobhttpd.cpu.mandelbrot import mandelbrot


def test_mandelbrot_small_matrix():
    grid, elapsed = mandelbrot(5, 5, 10, None)
    assert len(grid) == 5
    assert len(grid[0]) == 5
    assert elapsed < 2000


def test_mandelbrot_intensity_range():
    grid, _ = mandelbrot(20, 20, 50, None)
    values = [v for row in grid for v in row]
    assert all(0 <= v <= 50 for v in values)
    assert max(values) > 0


def test_mandelbrot_rectangular_shape():
    grid, _ = mandelbrot(7, 3, 5)
    assert len(grid) == 3
    assert all(len(row) == 7 for row in grid)


def test_mandelbrot_origin_is_inside_set():
    # With width 7 / height 5, column 5 and row 2 land on (0.0, 0.0).
    grid, _ = mandelbrot(7, 5, 40)
    assert grid[2][5] == 40
    # The top-left corner (-2.5, -1.25) escapes immediately.
    assert grid[0][0] == 1


def test_mandelbrot_pgm_dump(tmp_path):
    filename = tmp_path / "test_mandelbrot.pgm"
    grid, _ = mandelbrot(10, 10, 30, str(filename))
    content = filename.read_text(encoding="ascii")
    assert "P2" in content
    lines = content.splitlines()
    assert lines[:3] == ["P2", "10 10", "30"]
    assert [int(v) for v in lines[3].split()] == grid[0]


def test_mandelbrot_ppm_dump(tmp_path):
    filename = tmp_path / "test_mandelbrot.ppm"
    mandelbrot(10, 10, 30, str(filename))
    content = filename.read_text(encoding="ascii")
    assert "P3" in content
    lines = content.splitlines()
    assert lines[:3] == ["P3", "10 10", "255"]
    assert len(lines) == 3 + 100
    for line in lines[3:]:
        red, green, blue = (int(v) for v in line.split())
        assert green == 0
        assert red + blue == 255


def test_mandelbrot_other_extension_writes_nothing(tmp_path):
    filename = tmp_path / "image.png"
    grid, _ = mandelbrot(3, 3, 5, str(filename))
    assert not filename.exists()
    assert len(grid) == 3