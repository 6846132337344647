# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Computes 2nd derivatives of |complex power flow|**2 w.r.t. V.
"""

from numpy import arange
from scipy.sparse import csr_matrix

from flowhess.d2Sbr_dV2 import d2Sbr_dV2


def d2ASbr_dV2(dSbr_dV1, dSbr_dV2, Sbr, Cbr, Ybr, V, lam, vcart=False):
    """Computes 2nd derivatives of |complex power flow|**2 w.r.t. V.

    Second derivatives of C{lam.T * |Sbr|**2} for one branch end w.r.t.
    (Va, Vm), or (Vr, Vi) if C{vcart} is True. C{dSbr_dV1}, C{dSbr_dV2} and
    C{Sbr} are the sensitivities and flows of L{dSbr_dV} in the same
    coordinates, C{Cbr} and C{Ybr} the connection and admittance rows of the
    branch end. Uses::

        d2(lam.T * |S|**2) = 2 * Re( d2((conj(S) * lam).T * S)
                                     + dS.T * diag(lam) * conj(dS) )

    with the first term from L{d2Sbr_dV2}. Passing the real parts of the
    flows and of their sensitivities gives the 2nd derivatives of the squared
    real power flows instead. Returns the four real sparse blocks
    C{H11, H12, H21, H22}.

    @see: L{dSbr_dV}, L{d2Sbr_dV2}
    """
    nl = len(lam)
    il = arange(nl)

    diaglam = csr_matrix((lam, (il, il)), (nl, nl))
    diagSbr_conj = csr_matrix((Sbr.conj(), (il, il)), (nl, nl))

    S11, S12, S21, S22 = d2Sbr_dV2(Cbr, Ybr, V, diagSbr_conj * lam, vcart)

    H11 = 2 * (S11 + dSbr_dV1.T * diaglam * dSbr_dV1.conj()).real
    H21 = 2 * (S21 + dSbr_dV2.T * diaglam * dSbr_dV1.conj()).real
    H12 = 2 * (S12 + dSbr_dV1.T * diaglam * dSbr_dV2.conj()).real
    H22 = 2 * (S22 + dSbr_dV2.T * diaglam * dSbr_dV2.conj()).real

    return H11.tocsr(), H12.tocsr(), H21.tocsr(), H22.tocsr()
