# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Computes partial derivatives of power flows w.r.t. voltage.
"""

from numpy import arange, ones, real, int64
from scipy.sparse import issparse, csr_matrix as sparse

from flowhess.idx_brch import F_BUS, T_BUS


def dSbr_dV(branch, Yf, Yt, V, vcart=False):
    """Computes partial derivatives of power flows w.r.t. voltage.

    Returns the sparse C{nl x nb} sensitivities of the complex power flows at
    the "from" and "to" ends of the constrained branches w.r.t. the two
    voltage coordinates, (Va, Vm) or, with C{vcart=True}, (Vr, Vi), followed
    by the flows C{Sf}, C{St}. C{branch}, C{Yf} and C{Yt} hold the constrained
    branches only, dense admittances are converted to CSR. With
    C{If = Yf * V}, C{Vf = Cf * V} and C{Sf = diag(Vf) * conj(If)}::

        dSf/dVa = j * (conj(diag(If)) * Cf * diag(V) - diag(Vf) * conj(Yf * diag(V)))
        dSf/dVm = diag(Vf) * conj(Yf * diag(V / |V|)) + conj(diag(If)) * Cf * diag(V / |V|)
        dSf/dVr = conj(diag(If)) * Cf + diag(Vf) * conj(Yf)
        dSf/dVi = j * (conj(diag(If)) * Cf - diag(Vf) * conj(Yf))

    and likewise for the "to" end.

    See R. D. Zimmerman, "AC Power Flows, Generalized OPF Costs and their
    Derivatives using Complex Matrix Notation", MATPOWER Technical Note 2.
    """
    ## define
    f = real(branch[:, F_BUS]).astype(int64)       ## list of "from" buses
    t = real(branch[:, T_BUS]).astype(int64)       ## list of "to" buses
    nl = len(f)
    nb = len(V)
    il = arange(nl)
    ib = arange(nb)
    shape = (nl, nb)

    if not issparse(Yf):
        Yf = sparse(Yf)
    if not issparse(Yt):
        Yt = sparse(Yt)

    ## compute currents
    If = Yf * V
    It = Yt * V

    diagVf = sparse((V[f], (il, il)), (nl, nl))
    diagIf = sparse((If, (il, il)), (nl, nl))
    diagVt = sparse((V[t], (il, il)), (nl, nl))
    diagIt = sparse((It, (il, il)), (nl, nl))

    if vcart:
        Cf = sparse((ones(nl), (il, f)), shape)
        Ct = sparse((ones(nl), (il, t)), shape)

        # Partial derivative of S w.r.t. real part of the voltage.
        dSf_dV1 = diagIf.conj() * Cf + diagVf * Yf.conj()
        dSt_dV1 = diagIt.conj() * Ct + diagVt * Yt.conj()

        # Partial derivative of S w.r.t. imaginary part of the voltage.
        dSf_dV2 = 1j * (diagIf.conj() * Cf - diagVf * Yf.conj())
        dSt_dV2 = 1j * (diagIt.conj() * Ct - diagVt * Yt.conj())
    else:
        Vnorm = V / abs(V)
        diagV = sparse((V, (ib, ib)), (nb, nb))
        diagVnorm = sparse((Vnorm, (ib, ib)), (nb, nb))

        # Partial derivative of S w.r.t voltage phase angle.
        dSf_dV1 = 1j * (diagIf.conj() *
            sparse((V[f], (il, f)), shape) - diagVf * (Yf * diagV).conj())

        dSt_dV1 = 1j * (diagIt.conj() *
            sparse((V[t], (il, t)), shape) - diagVt * (Yt * diagV).conj())

        # Partial derivative of S w.r.t. voltage amplitude.
        dSf_dV2 = diagVf * (Yf * diagVnorm).conj() + diagIf.conj() * \
            sparse((Vnorm[f], (il, f)), shape)

        dSt_dV2 = diagVt * (Yt * diagVnorm).conj() + diagIt.conj() * \
            sparse((Vnorm[t], (il, t)), shape)

    # Compute power flow vectors.
    Sf = V[f] * If.conj()
    St = V[t] * It.conj()

    return dSf_dV1, dSf_dV2, dSt_dV1, dSt_dV2, Sf, St
