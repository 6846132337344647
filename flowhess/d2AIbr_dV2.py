# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Computes 2nd derivatives of squared branch current magnitudes w.r.t. V.
"""

from numpy import arange
from scipy.sparse import csr_matrix as sparse

from flowhess.d2Ibr_dV2 import d2Ibr_dV2


def d2AIbr_dV2(dIbr_dVa, dIbr_dVm, Ibr, Ybr, V, lam):
    """Computes 2nd derivatives of squared branch current magnitudes w.r.t. V.

    Second derivatives w.r.t. voltage angle and magnitude of C{lam.T * |Ibr|**2}
    for the currents C{Ibr = Ybr * V} of one branch end. Uses::

        d2(lam.T * |I|**2) = 2 * Re( d2(conj(I) * lam).T * I
                                     + dI.T * diag(lam) * conj(dI) )

    where the first term comes from L{d2Ibr_dV2} with the weights
    C{conj(Ibr) * lam}. C{dIbr_dVa} and C{dIbr_dVm} are the sparse
    C{nl x nb} current sensitivities of L{dIbr_dV}. Returns the real sparse
    blocks C{Haa, Hav, Hva, Hvv}.

    @see: L{dIbr_dV}, L{d2ASbr_dV2}
    """
    nl = len(lam)
    il = arange(nl)

    diaglam = sparse((lam, (il, il)), (nl, nl))
    diagIbr_conj = sparse((Ibr.conj(), (il, il)), (nl, nl))

    Iaa, Iav, Iva, Ivv = d2Ibr_dV2(Ybr, V, diagIbr_conj * lam)

    Haa = 2 * (Iaa + dIbr_dVa.T * diaglam * dIbr_dVa.conj()).real
    Hav = 2 * (Iav + dIbr_dVa.T * diaglam * dIbr_dVm.conj()).real
    Hva = 2 * (Iva + dIbr_dVm.T * diaglam * dIbr_dVa.conj()).real
    Hvv = 2 * (Ivv + dIbr_dVm.T * diaglam * dIbr_dVm.conj()).real

    return Haa.tocsr(), Hav.tocsr(), Hva.tocsr(), Hvv.tocsr()
