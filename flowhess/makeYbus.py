# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.


"""Builds the bus admittance matrix and branch admittance matrices.
"""

from numpy import ones, conj, nonzero, exp, pi, hstack, real, arange, errstate
from scipy.sparse import csr_matrix

from flowhess.idx_brch import BR_R, BR_X, BR_B, BR_STATUS, SHIFT, TAP
from flowhess.idx_bus import GS, BS
from flowhess.makeCbr import makeCbr


def makeYbus(baseMVA, bus, branch):
    """Builds the bus admittance matrix and branch admittance matrices.

    Returns C{Ybus} for all buses together with the branch admittance
    matrices C{Yf} and C{Yt}. C{Yf * V} is the vector of complex currents
    injected at the "from" end of every branch, C{Yt * V} the same at the
    "to" end. Shunts are converted to p.u. on C{baseMVA}.

    The admittance matrices of the constrained branches C{il} are the rows
    C{Yf[il, :]} and C{Yt[il, :]}.
    """
    ## constants
    nb = bus.shape[0]  ## number of buses
    nl = branch.shape[0]  ## number of lines

    ## for each branch, compute the elements of the branch admittance matrix where
    ##
    ##      | If |   | Yff  Yft |   | Vf |
    ##      |    | = |          | * |    |
    ##      | It |   | Ytf  Ytt |   | Vt |
    ##
    Ytt, Yff, Yft, Ytf = branch_vectors(branch, nl)
    ## bus shunt admittances, Gs + j Bs at V = 1 p.u.
    Ysh = (bus[:, GS] + 1j * bus[:, BS]) / baseMVA

    ## build connection matrices
    Cf, Ct = makeCbr(branch, arange(nl), nb)
    f, t = Cf.indices, Ct.indices

    ## build Yf and Yt such that Yf * V is the vector of complex branch currents injected
    ## at each branch's "from" bus, and Yt is the same for the "to" bus end
    i = hstack([arange(nl), arange(nl)])  ## double set of row indices

    Yf = csr_matrix((hstack([Yff, Yft]), (i, hstack([f, t]))), (nl, nb))
    Yt = csr_matrix((hstack([Ytf, Ytt]), (i, hstack([f, t]))), (nl, nb))

    ## build Ybus
    Ybus = Cf.T * Yf + Ct.T * Yt + \
           csr_matrix((Ysh, (arange(nb), arange(nb))), (nb, nb))

    # for canonical format
    for Y in (Ybus, Yf, Yt):
        Y.eliminate_zeros()
        Y.sum_duplicates()
        Y.sort_indices()

    return Ybus.tocsr(), Yf, Yt


@errstate(all="raise")
def branch_vectors(branch, nl):
    stat = real(branch[:, BR_STATUS])  # ones at in-service branches
    Ys = stat / (branch[:, BR_R] + 1j * branch[:, BR_X])  # series admittance
    Bc = stat * branch[:, BR_B]  # line charging susceptance

    tap = ones(nl, dtype=complex)  # default tap ratio = 1
    i = nonzero(real(branch[:, TAP]))  # indices of non-zero tap ratios
    tap[i] = real(branch[i, TAP])  # assign non-zero tap ratios
    tap = tap * exp(1j * pi / 180 * real(branch[:, SHIFT]))  # add phase shifters

    Ytt = Ys + 1j * Bc / 2
    Yff = Ytt / (tap * conj(tap))
    Yft = - Ys / conj(tap)
    Ytf = - Ys / tap
    return Ytt, Yff, Yft, Ytf
