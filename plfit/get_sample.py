"""
Read a sample of non-negative numbers from a text file.

Values may be separated by any whitespace, including newlines.
Negative values are rejected, since the power law is not defined for them.
"""
from pathlib import Path

import numpy as np


class InputError(ValueError):
    """The input file could not be turned into a valid sample."""


def get_sample(path):
    """
    Parameters
    ----------
    path : str or Path
        The text file to read.

    Returns
    -------
    x : float array
        The values in file order.

    Raises
    ------
    InputError
        If the file can't be read, holds no values, or holds a value that is
        not a finite, non-negative number.

    """
    try:
        text = Path(path).read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError("Unable to open: %s." % path) from exc

    tokens = text.split()
    if len(tokens) == 0:
        raise InputError("No values found in %s." % path)
    try:
        x = np.array(tokens, dtype=np.float64)
    except ValueError as exc:
        raise InputError("Malformed value in %s: %s" % (path, exc)) from exc

    if not np.all(np.isfinite(x)):
        raise InputError("Non-finite input not supported!")
    if np.amin(x) < 0:
        raise InputError("Negative input not supported!")

    return x
