class PointArrayError(Exception):
    pass


class IncompatibleSizeError(PointArrayError, ValueError):
    def __init__(self, n_x: int, n_y: int):
        super().__init__(f"Incompatible array sizes {n_x}/{n_y}")
        self.n_x = n_x
        self.n_y = n_y


class RangeError(PointArrayError, IndexError):
    pass


class OddLengthError(PointArrayError, ValueError):
    def __init__(self, n: int):
        super().__init__(f"Must have an even number of values, got {n}")
        self.n = n
