"""
Dense linear algebra for small matrices.

This subpackage provides the linear-system, determinant and symmetric
eigenvalue routines used by curve fitting and by the geometry layer. All
functions accept nested sequences or ``numpy`` arrays and never modify their
inputs unless documented otherwise.

Modules:
    gauss:
        Gauss-Jordan elimination with epsilon-threshold pivoting and
        upper-triangular back substitution.

    determinant:
        Closed-form 2x2 determinant and fraction-free Gauss-Bareiss
        elimination for larger matrices.

    eigen:
        Cyclic Jacobi rotations for symmetric matrices (eigenvalues and
        eigenvectors).

Design Principle:
    Intended for the 2x2 to 10x10 systems produced by interpolation and
    regression. Large or sparse problems are out of scope.
"""

from .determinant import determinant, gauss_bareiss
from .eigen import jacobi_eigen
from .gauss import back_substitute, solve

__all__ = [
    "solve",
    "back_substitute",
    "determinant",
    "gauss_bareiss",
    "jacobi_eigen",
]
