# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Computes 2nd derivatives of complex power flow w.r.t. voltage.
"""

from numpy import ones, arange
from scipy.sparse import csr_matrix


def d2Sbr_dV2(Cbr, Ybr, V, lam, vcart=False):
    """Computes 2nd derivatives of complex power flow w.r.t. voltage.

    Second derivatives of C{lam.T * Sbr} for one branch end, where
    C{Sbr = diag(Cbr * V) * conj(Ybr * V)}, w.r.t. (Va, Vm) or, if C{vcart}
    is True, (Vr, Vi). Returns four complex sparse C{nb x nb} blocks, e.g.
    in polar form::

        Haa = d/dVa (dSbr_dVa.T * lam)
        Hav = d/dVm (dSbr_dVa.T * lam)
        Hva = d/dVa (dSbr_dVm.T * lam)
        Hvv = d/dVm (dSbr_dVm.T * lam)

    With C{A = Ybr.H * diag(lam) * Cbr} the weighted flow is the quadratic
    form C{conj(V).T * A * V}. The polar blocks follow from the bilinear
    operator C{B = diag(conj(V)) * A * diag(V)} and the diagonals of
    C{(A * V) * conj(V)} and C{(A.T * conj(V)) * V}, scaled by C{1 / |V|}
    for every magnitude derivative. The Cartesian blocks are::

        Hrr = Hii = A + A.T
        Hri = j * (A - A.T)
        Hir = Hri.T

    See R. D. Zimmerman, "AC Power Flows, Generalized OPF Costs and their
    Derivatives using Complex Matrix Notation", MATPOWER Technical Note 2.
    """
    nb = len(V)
    nl = len(lam)
    ib = arange(nb)
    il = arange(nl)

    diaglam = csr_matrix((lam, (il, il)), (nl, nl))
    A = Ybr.conj().T * diaglam * Cbr

    if vcart:
        Hrr = (A + A.T).tocsr()
        Hri = (1j * (A - A.T)).tocsr()
        Hir = Hri.T.tocsr()
        Hii = Hrr.copy()
        return Hrr, Hri, Hir, Hii

    diagV = csr_matrix((V, (ib, ib)), (nb, nb))
    B = diagV.conj() * A * diagV
    D = csr_matrix(((A * V) * V.conj(), (ib, ib)), (nb, nb))
    E = csr_matrix(((A.T * V.conj()) * V, (ib, ib)), (nb, nb))
    F = B + B.T
    G = csr_matrix((ones(nb) / abs(V), (ib, ib)), (nb, nb))

    Haa = (F - D - E).tocsr()
    Hva = (1j * G * (B - B.T - D + E)).tocsr()
    Hav = Hva.T.tocsr()
    Hvv = (G * F * G).tocsr()

    return Haa, Hav, Hva, Hvv
