# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Computes 2nd derivatives of complex branch current w.r.t. voltage.
"""

from numpy import ones, arange
from scipy.sparse import csr_matrix


def d2Ibr_dV2(Ybr, V, lam):
    """Computes 2nd derivatives of complex branch current w.r.t. voltage.

    Returns 4 matrices containing the partial derivatives w.r.t. voltage
    angle and magnitude of the product of a vector C{lam} with the 1st partial
    derivatives of the complex branch currents. Takes sparse branch admittance
    matrix C{Ybr}, voltage vector C{V} and C{nl x 1} vector of multipliers
    C{lam}. Output matrices are sparse.

    The current is linear in V, so all curvature comes from the polar
    parameterization and C{Hvv} is zero.

    @author: Ray Zimmerman (PSERC Cornell)
    """
    nb = len(V)
    ib = arange(nb)
    diaginvVm = csr_matrix((ones(nb) / abs(V), (ib, ib)), (nb, nb))

    Haa = csr_matrix((-(Ybr.T * lam) * V, (ib, ib)), (nb, nb))
    Hva = (-1j * Haa * diaginvVm).tocsr()
    Hav = Hva.copy()
    Hvv = csr_matrix((nb, nb))

    return Haa, Hav, Hva, Hvv
