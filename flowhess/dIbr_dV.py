# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Computes partial derivatives of branch currents w.r.t. voltage.
"""

from numpy import arange
from scipy.sparse import issparse, csr_matrix as sparse


def dIbr_dV(branch, Yf, Yt, V, vcart=False):
    """Computes partial derivatives of branch currents w.r.t. voltage.

    Returns four matrices containing partial derivatives of the complex
    branch currents at "from" and "to" ends of each branch w.r.t voltage
    angle and magnitude (polar) or real and imaginary part (C{vcart=True})
    respectively (for all buses), followed by the currents themselves. The
    following explains the expressions used to form the matrices::

        If = Yf * V

    Partials of V, Vf & If w.r.t. voltage angles::
        dV/dVa  = j * diag(V)
        dIf/dVa = Yf * dV/dVa = Yf * j * diag(V)

    Partials of V, Vf & If w.r.t. voltage magnitudes::
        dV/dVm  = diag(V / abs(V))
        dIf/dVm = Yf * dV/dVm = Yf * diag(V / abs(V))

    Partials of If w.r.t. real and imaginary part of the voltage::
        dIf/dVr = Yf
        dIf/dVi = j * Yf

    Derivations for "to" bus are similar. C{branch} is not used, it is kept
    for a signature identical to L{dSbr_dV}.

    @author: Ray Zimmerman (PSERC Cornell)
    """
    if not issparse(Yf):
        Yf = sparse(Yf)
    if not issparse(Yt):
        Yt = sparse(Yt)

    if vcart:
        dIf_dV1 = Yf.copy()
        dIf_dV2 = 1j * Yf
        dIt_dV1 = Yt.copy()
        dIt_dV2 = 1j * Yt
    else:
        nb = len(V)
        i = arange(nb)
        diagV = sparse((V, (i, i)), (nb, nb))
        diagVnorm = sparse((V / abs(V), (i, i)), (nb, nb))

        dIf_dV1 = Yf * 1j * diagV
        dIf_dV2 = Yf * diagVnorm
        dIt_dV1 = Yt * 1j * diagV
        dIt_dV2 = Yt * diagVnorm

    # Compute currents.
    If = Yf * V
    It = Yt * V

    return dIf_dV1, dIf_dV2, dIt_dV1, dIt_dV2, If, It
