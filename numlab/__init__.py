"""Numerical kernels: 2-D vectors, Gram-Schmidt, tridiagonal Jacobi solves, chemistry equilibria, quadrature and worksharing examples."""

__version__ = "0.1.0"