"""
Unit tests for pysatl_univariate: the distribution framework, parametric
families and the builtin continuous distributions.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
