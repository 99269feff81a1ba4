import numpy as np
from typing import Iterator, Tuple
import logging


class DenseMatrix:
    """
    Fixed-size 2D store of floats backed by one flat NumPy array.

    Elements are addressed as (col, row) and live at linear offset
    ``row * width + col``. The matrix never grows or shrinks after
    construction; it only supports reading, writing and bulk filling.

    Within a Layer the matrix is sized (width=neurons, height=inputs), so a
    row holds the weights of one input towards every neuron and a column holds
    all incoming weights of one neuron.

    Key Attributes:
        width (int): Number of columns.
        height (int): Number of rows.
        values (np.ndarray): Flat storage of shape (width * height,).
    """

    def __init__(self, width: int, height: int, fill_value: float = 0.0, dtype=np.float64):
        """
        Creates the matrix with every element set to `fill_value`.

        Args:
            width: Number of columns. Must be positive.
            height: Number of rows. Must be positive.
            fill_value: Initial value of every element.
            dtype: NumPy dtype of the storage.

        Raises:
            ValueError: If a dimension is not a positive integer.
        """
        if int(width) != width or int(height) != height or width < 1 or height < 1:
            raise ValueError(f"DenseMatrix dimensions must be positive integers, got ({width}, {height})")

        self.width = int(width)
        self.height = int(height)
        self.values = np.full(self.width * self.height, fill_value, dtype=dtype)

    def _offset(self, col: int, row: int) -> int:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise IndexError(
                f"DenseMatrix index (col={col}, row={row}) out of range for "
                f"size ({self.width}, {self.height})"
            )
        return row * self.width + col

    def get(self, col: int, row: int) -> float:
        """Returns the element at (col, row)."""
        return float(self.values[self._offset(col, row)])

    def set(self, col: int, row: int, value: float):
        """Overwrites the element at (col, row)."""
        self.values[self._offset(col, row)] = value

    def __getitem__(self, index: Tuple[int, int]) -> float:
        col, row = index
        return self.get(col, row)

    def __setitem__(self, index: Tuple[int, int], value: float):
        col, row = index
        self.set(col, row, value)

    def fill(self, value: float):
        """Sets every element to `value`."""
        self.values.fill(value)

    def grid(self) -> np.ndarray:
        """
        Returns a writable (height, width) view sharing this matrix's storage.

        ``grid()[row, col]`` is the same element as ``get(col, row)``.
        """
        return self.values.reshape(self.height, self.width)

    def to_array(self) -> np.ndarray:
        """Returns an independent (height, width) copy of the elements."""
        return self.grid().copy()

    def copy(self) -> 'DenseMatrix':
        """Returns an independent matrix holding the same values."""
        clone = DenseMatrix(self.width, self.height, dtype=self.values.dtype)
        clone.values[:] = self.values
        return clone

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height), in the order the constructor takes them."""
        return self.width, self.height

    def __iter__(self) -> Iterator[float]:
        # Linear order: row 0 left to right, then row 1, ...
        return (float(v) for v in self.values)

    def __len__(self) -> int:
        return self.values.size

    def __eq__(self, other) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.values, other.values))

    __hash__ = None

    def __repr__(self):
        return f"DenseMatrix(width={self.width}, height={self.height})"


def constant_matrix(width: int, height: int, value: float) -> DenseMatrix:
    """Builds a matrix with every element equal to `value` and logs it."""
    matrix = DenseMatrix(width, height, value)
    logging.debug(f"Created constant {width}x{height} matrix filled with {value}")
    return matrix
