import numpy as np
import numpy.typing as npt


def index_of_smallest(vals: npt.NDArray) -> int:
    """
    Ties resolve to the first occurrence. -1 for an empty array.
    """
    if vals.size == 0:
        return -1
    return np.argmin(vals).item()


def index_of_largest(vals: npt.NDArray) -> int:
    """
    Ties resolve to the first occurrence. -1 for an empty array.
    """
    if vals.size == 0:
        return -1
    return np.argmax(vals).item()


def index_sort_ascending(vals: npt.NDArray) -> npt.NDArray:
    return np.argsort(vals, kind="stable")


def index_sort_descending(vals: npt.NDArray) -> npt.NDArray:
    # negating keeps equal values in their original order, which reversing an
    # ascending argsort would not
    return np.argsort(-vals, kind="stable")
