"""Piecewise-linear geometry used to stitch membership shapes."""
