# -*- coding: utf-8 -*-

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import numpy as np


class FlowHessException(Exception):
    """
    General flowhess custom parent exception.
    """
    pass


class FlowHessShapeError(FlowHessException, ValueError):
    """
    Dimensions of voltage state, branch admittances and multipliers disagree.
    """
    pass


class UnknownFlowLimit(FlowHessException, ValueError):
    """
    The branch flow limit selector does not name a supported quantity.
    """
    pass


def _check_state(x):
    """
    Checks that x is a pair of equal length vectors and returns them as float arrays.
    """
    if len(x) != 2:
        raise FlowHessShapeError("the voltage state must be a pair of vectors, got %i" % len(x))
    x1, x2 = (np.asarray(xi, dtype=float).ravel() for xi in x)
    if x1.shape != x2.shape:
        raise FlowHessShapeError("voltage state vectors differ in length (%i vs. %i)"
                                 % (len(x1), len(x2)))
    return x1, x2


def _check_branch_admittances(Yf, Yt, nl2, nb):
    for name, Y in (("Yf", Yf), ("Yt", Yt)):
        if Y.shape != (nl2, nb):
            raise FlowHessShapeError("%s has shape %s, expected %s for %i constrained branches "
                                     "and %i buses" % (name, Y.shape, (nl2, nb), nl2, nb))


def _split_multipliers(lam, nl2):
    """
    Splits the multipliers on the branch flow limits into the "from" and "to" halves.

    An empty multiplier vector is valid and yields two empty halves.
    """
    lam = np.asarray(lam, dtype=float).ravel()
    nmu = len(lam) // 2
    if len(lam) not in (0, 2 * nl2):
        raise FlowHessShapeError("got %i multipliers for %i constrained branches, expected %i or 0"
                                 % (len(lam), nl2, 2 * nl2))
    return lam[:nmu], lam[nmu:nmu + nmu]


def _state_to_voltage(x1, x2, v_cartesian):
    """
    Reconstructs the complex bus voltage from (Va, Vm) or (Vr, Vi).
    """
    if v_cartesian:
        return x1 + 1j * x2
    return x2 * np.exp(1j * x1)
