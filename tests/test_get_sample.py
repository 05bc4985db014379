"""
Tests for reading a sample from a text file.
"""

import numpy as np
import pytest

from plfit import InputError, get_sample


class TestGetSample:
    """Tests for get_sample()."""

    def test_column(self, example_file) -> None:
        x = get_sample(example_file)
        assert np.array_equal(x, [1.0, 1.2, 1.5, 2.0, 2.5, 3.0, 4.0, 5.0, 8.0, 10.0])

    def test_any_whitespace(self, tmp_path) -> None:
        path = tmp_path / "mixed.txt"
        path.write_text("1 2.5\t3e1\n\n  4\r\n0\n")
        assert np.array_equal(get_sample(path), [1.0, 2.5, 30.0, 4.0, 0.0])

    def test_str_path(self, example_file) -> None:
        assert len(get_sample(str(example_file))) == 10

    def test_negative(self, tmp_path) -> None:
        path = tmp_path / "neg.txt"
        path.write_text("1.0\n-2.0\n3.0\n")
        with pytest.raises(InputError, match="Negative"):
            get_sample(path)

    def test_malformed(self, tmp_path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("1.0\nabc\n")
        with pytest.raises(InputError, match="Malformed"):
            get_sample(path)

    def test_not_finite(self, tmp_path) -> None:
        path = tmp_path / "nan.txt"
        path.write_text("1.0\nnan\n")
        with pytest.raises(InputError, match="Non-finite"):
            get_sample(path)

    def test_empty(self, tmp_path) -> None:
        path = tmp_path / "empty.txt"
        path.write_text("\n  \n")
        with pytest.raises(InputError, match="No values"):
            get_sample(path)

    def test_missing(self, tmp_path) -> None:
        with pytest.raises(InputError, match="Unable to open"):
            get_sample(tmp_path / "missing.txt")

    def test_is_value_error(self) -> None:
        assert issubclass(InputError, ValueError)
