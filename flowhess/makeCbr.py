# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Builds the branch to bus connection matrices of the constrained branches.
"""

from numpy import ones, arange, asarray, real, int64
from scipy.sparse import csr_matrix

from flowhess.idx_brch import F_BUS, T_BUS


def makeCbr(branch, il, nb):
    """Builds the branch to bus connection matrices of the constrained branches.

    Returns the sparse C{nl2 x nb} matrices C{Cf} and C{Ct} with a single 1
    per row, in the column of the "from" and the "to" bus of branch C{il[k]}.
    The rows are ordered like C{il}, which is the order the rows of C{Yf} and
    C{Yt} must have as well. Nothing checks that they do.

    @param branch: branch matrix
    @param il: indices of the constrained branches
    @param nb: number of buses
    """
    il = asarray(il, dtype=int64).ravel()
    nl2 = len(il)
    f = real(branch[il, F_BUS]).astype(int64)    ## list of "from" buses
    t = real(branch[il, T_BUS]).astype(int64)    ## list of "to" buses
    ## connection matrix for line & from buses
    Cf = csr_matrix((ones(nl2), (arange(nl2), f)), (nl2, nb))
    ## connection matrix for line & to buses
    Ct = csr_matrix((ones(nl2), (arange(nl2), t)), (nl2, nb))
    return Cf, Ct
