# -*- coding: utf-8 -*-

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import numpy as np
import pytest

from flowhess.test.helper_functions import branch_row, make_case


@pytest.fixture
def two_bus_case():
    """
    One branch with resistance, line charging, off-nominal tap and phase shift.
    """
    branch = [branch_row(0, 1, r=0.02, x=0.1, b=0.05, rate_a=50., tap=0.97, shift=3.)]
    return make_case(branch, va=[0.05, -0.1], vm=[1.03, 0.96])


@pytest.fixture
def lossless_three_bus_case():
    """
    Two lossless lines 0-1 (x = 1) and 1-2 (x = 0.5) at |V| = 1 with angle differences of
    pi / 3 across both lines.
    """
    branch = [branch_row(0, 1, x=1.), branch_row(1, 2, x=0.5)]
    return make_case(branch, va=[0., -np.pi / 3, -2 * np.pi / 3], vm=[1., 1., 1.])


@pytest.fixture
def four_bus_case():
    """
    Meshed four bus grid, only the branches 0, 2 and 3 are constrained.
    """
    branch = [branch_row(0, 1, r=0.01, x=0.08, b=0.02, rate_a=100.),
              branch_row(0, 2, r=0.03, x=0.12, b=0.01, rate_a=80.),
              branch_row(1, 2, r=0.02, x=0.10),
              branch_row(1, 3, x=0.05, rate_a=60., tap=1.02, shift=-2.),
              branch_row(2, 3, r=0.015, x=0.09, b=0.03, rate_a=70.)]
    return make_case(branch, va=[0., -0.04, -0.07, -0.11], vm=[1.02, 0.99, 0.97, 1.01],
                     il=[0, 2, 3], gs=[0., 1., 0., 0.], bs=[0., 0., 5., 0.])


@pytest.fixture
def four_bus_multipliers():
    return np.array([0.3, 1.2, 0.7, 0.5, 0.0, 2.1])
