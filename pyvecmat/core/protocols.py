"""
Core protocols for PyVecMat.

These define structural interfaces that the concrete vector and matrix
types satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so collaborators can type against the contract without importing
the concrete classes.

Design Principles:
    - Minimal contracts: prescribe only what every variant supports
    - Representation-agnostic: callers never learn which concrete type
      (fixed or general) a factory handed them
"""

from typing import Protocol, runtime_checkable

from pyvecmat.core.precision import Precision


@runtime_checkable
class Vector(Protocol):
    """
    Capability shared by every vector variant.

    Indexed reads return 0 for indices at or beyond the dimension so that
    vectors of different dimension can be combined (dimension promotion).
    """

    @property
    def precision(self) -> Precision:
        """Scalar precision of the components."""
        ...

    @property
    def dimension(self) -> int:
        """Number of components."""
        ...

    def __getitem__(self, index: int) -> float:
        """Component at index, 0 beyond the dimension."""
        ...

    @property
    def length(self) -> float:
        """Euclidean length."""
        ...

    @property
    def squared_length(self) -> float:
        """Squared Euclidean length."""
        ...

    def add(self, other: 'Vector') -> 'Vector':
        """Sum computed in the space of the larger dimension."""
        ...

    def subtract(self, other: 'Vector') -> 'Vector':
        """Difference computed in the space of the larger dimension."""
        ...

    def dot(self, other: 'Vector') -> float:
        """Dot product, missing components count as 0."""
        ...


@runtime_checkable
class MatrixStorage(Protocol):
    """
    The two primitives all matrix arithmetic is written against.

    get_at/set_at perform no bounds checking; callers validate first.
    """

    @property
    def rows(self) -> int:
        ...

    @property
    def columns(self) -> int:
        ...

    def get_at(self, row: int, column: int) -> float:
        ...

    def set_at(self, row: int, column: int, value: float) -> None:
        ...
