from mandelbrot.escape import escape_count, quantize


def test_origin_never_escapes():
    assert escape_count(0j, 255, 2.0) is None
    assert escape_count(0j, 1, 0.5) is None


def test_check_happens_before_update():
    # index 0 sees z = 0; z becomes 2+2j and escapes on the next check
    assert escape_count(complex(2.0, 2.0), 255, 2.0) == 1


def test_limit_bounds_the_iterations():
    assert escape_count(complex(2.0, 2.0), 1, 2.0) is None
    assert escape_count(complex(2.0, 2.0), 2, 2.0) == 1
    assert escape_count(complex(2.0, 2.0), 0, 2.0) is None


def test_escape_requires_strictly_greater_magnitude():
    # the orbit of -2 is 0, -2, 2, 2, ... with |z| == radius
    assert escape_count(complex(-2.0, 0.0), 255, 2.0) is None


def test_slow_escape():
    # orbit 0, 1, 2, 5
    assert escape_count(complex(1.0, 0.0), 255, 2.0) == 3


def test_radius_is_compared_squared():
    assert escape_count(complex(1.0, 0.0), 255, 0.5) == 1


def test_quantize():
    assert quantize(None, 255) == 0
    assert quantize(0, 255) == 255
    assert quantize(1, 255) == 254
    assert quantize(3, 10) == 7
