# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Partial derivatives of squared branch flow magnitudes w.r.t voltage.
"""

from numpy import arange
from scipy.sparse import csr_matrix


def dAbr_dV(dFf_dV1, dFf_dV2, dFt_dV1, dFt_dV2, Ff, Ft):
    """Partial derivatives of squared branch flow magnitudes w.r.t voltage.

    Takes the flows C{Ff}, C{Ft} at both branch ends and their sensitivities
    w.r.t. the two voltage coordinates, as returned by L{dSbr_dV} or
    L{dIbr_dV}, and returns the sensitivities of C{|Ff|**2} and C{|Ft|**2}.
    The flows can be complex power, complex current or real power (pass the
    real parts), the coordinates polar or Cartesian::

        |F|**2 = Re(F)**2 + Im(F)**2
        d|F|**2/dx = 2 * diag(Re(F)) * Re(dF/dx) + 2 * diag(Im(F)) * Im(dF/dx)

    Returns the real sparse matrices C{dAf_dV1, dAf_dV2, dAt_dV1, dAt_dV2}.
    """
    nl = len(Ff)
    il = arange(nl)

    dAf_dRe = csr_matrix((2 * Ff.real, (il, il)), (nl, nl))
    dAf_dIm = csr_matrix((2 * Ff.imag, (il, il)), (nl, nl))
    dAt_dRe = csr_matrix((2 * Ft.real, (il, il)), (nl, nl))
    dAt_dIm = csr_matrix((2 * Ft.imag, (il, il)), (nl, nl))

    dAf_dV1 = dAf_dRe * dFf_dV1.real + dAf_dIm * dFf_dV1.imag
    dAf_dV2 = dAf_dRe * dFf_dV2.real + dAf_dIm * dFf_dV2.imag
    dAt_dV1 = dAt_dRe * dFt_dV1.real + dAt_dIm * dFt_dV1.imag
    dAt_dV2 = dAt_dRe * dFt_dV2.real + dAt_dIm * dFt_dV2.imag

    return dAf_dV1, dAf_dV2, dAt_dV1, dAt_dV2
