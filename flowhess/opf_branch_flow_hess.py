# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Evaluates Hessian of branch flow constraints.
"""

import logging
from typing import NamedTuple

from numpy import arange, asarray, int64
from scipy.sparse import vstack, hstack, issparse, csr_matrix as sparse

from flowhess.auxiliary import _check_state, _check_branch_admittances, _split_multipliers, \
    _state_to_voltage
from flowhess.d2AIbr_dV2 import d2AIbr_dV2
from flowhess.d2ASbr_dV2 import d2ASbr_dV2
from flowhess.d2Sbr_dV2 import d2Sbr_dV2
from flowhess.dIbr_dV import dIbr_dV
from flowhess.dSbr_dV import dSbr_dV
from flowhess.makeCbr import makeCbr
from flowhess.options import FlowLim, FlowHessOptions

logger = logging.getLogger(__name__)


class BranchEnd(NamedTuple):
    """
    Data of the "from" or the "to" end of the constrained branches.

    Cbr - connection matrix, Ybr - branch admittance rows, dF_dV1 / dF_dV2 - first
    derivatives of the flow w.r.t. the two voltage coordinates, Fbr - flow (complex power
    or current), mu - multipliers on the flow limits of this end
    """
    Cbr: sparse
    Ybr: sparse
    dF_dV1: sparse
    dF_dV2: sparse
    Fbr: object
    mu: object


def _hess_apparent_power_sq(end, V, vcart):
    return d2ASbr_dV2(end.dF_dV1, end.dF_dV2, end.Fbr, end.Cbr, end.Ybr, V, end.mu, vcart)


def _hess_real_power_sq(end, V, vcart):
    return d2ASbr_dV2(end.dF_dV1.real, end.dF_dV2.real, end.Fbr.real, end.Cbr, end.Ybr, V,
                      end.mu)


def _hess_current_sq(end, V, vcart):
    return d2AIbr_dV2(end.dF_dV1, end.dF_dV2, end.Fbr, end.Ybr, V, end.mu)


def _hess_real_power(end, V, vcart):
    # real multipliers, so Re(d2(mu.T * S)) is exactly d2(mu.T * P)
    return tuple(H.real for H in d2Sbr_dV2(end.Cbr, end.Ybr, V, end.mu))


KERNELS = {
    FlowLim.S: _hess_apparent_power_sq,
    FlowLim.P2: _hess_real_power_sq,
    FlowLim.I: _hess_current_sq,
    FlowLim.P: _hess_real_power,
}

# flow limit types without a Cartesian derivation
NOT_CARTESIAN = {
    FlowLim.P2: "Square of real power",
    FlowLim.I: "Current magnitude limit |I|",
    FlowLim.P: "Real power",
}


def branch_flow_hess_kernel(flow_lim, end, V, vcart=False):
    """
    Hessian blocks of mu.T * flow for one branch end and one flow limit type.

    Returns the four sparse nb x nb blocks (Haa, Hav, Hva, Hvv) in polar or
    (Hrr, Hri, Hir, Hii) in Cartesian coordinates. An empty multiplier vector
    gives all zero blocks, an unsupported combination of flow limit type and
    Cartesian coordinates logs a warning and gives all zero blocks.
    """
    nb = len(V)
    flow_lim = FlowLim.from_value(flow_lim)
    if vcart and flow_lim in NOT_CARTESIAN:
        logger.warning("%s is not calculated in Cartesian coordinates"
                       % NOT_CARTESIAN[flow_lim])
        return tuple(sparse((nb, nb)) for _ in range(4))
    if len(end.mu) == 0:
        return tuple(sparse((nb, nb)) for _ in range(4))
    return KERNELS[flow_lim](end, V, vcart)


def _sum_branch_ends(flow_lim, ends, V, vcart):
    """
    Adds up the Hessian blocks of the "from" and "to" ends.
    """
    H11 = H12 = H21 = H22 = sparse((len(V), len(V)))
    for end in ends:
        Hxx, Hxy, Hyx, Hyy = branch_flow_hess_kernel(flow_lim, end, V, vcart)
        H11 = H11 + Hxx
        H12 = H12 + Hxy
        H21 = H21 + Hyx
        H22 = H22 + Hyy
    return H11, H12, H21, H22


def opf_branch_flow_hess(x, lam, branch, Yf, Yt, il=None, options=None):
    """Evaluates Hessian of branch flow constraints.

    Hessian evaluation function for AC branch flow constraints, the
    contribution of the flow limits to the Hessian of the Lagrangian.

    Examples::
        d2H = opf_branch_flow_hess(x, lam, branch, Yf, Yt)
        d2H = opf_branch_flow_hess(x, lam, branch, Yf, Yt, il,
                                   FlowHessOptions.create("I"))

    @param x: voltage state, the pair (Va, Vm) or, with Cartesian
    coordinates, (Vr, Vi)
    @param lam: Kuhn-Tucker multipliers on the constrained branch flows,
    C{[muF, muT]} of length C{2 * len(il)}, or empty
    @param branch: branch matrix
    @param Yf: admittance matrix for "from" end of constrained branches
    @param Yt: admittance matrix for "to" end of constrained branches
    @param il: (optional) vector of branch indices corresponding to
    branches with flow limits (all others are assumed to be unconstrained).
    The default is C{range(nl)} (all branches). C{Yf} and C{Yt} contain
    only the rows corresponding to C{il}.
    @param options: (optional) L{FlowHessOptions}, apparent power limits
    in polar coordinates by default

    @return: sparse C{2nb x 2nb} Hessian of the branch flow constraints,
    rows and columns ordered like the voltage state.

    @raise FlowHessShapeError: if the dimensions of C{x}, C{Yf}, C{Yt}
    and C{lam} disagree
    """
    if options is None:
        options = FlowHessOptions()
    flow_lim = FlowLim.from_value(options.flow_lim)
    vcart = options.v_cartesian

    ## reconstruct V
    x1, x2 = _check_state(x)
    V = _state_to_voltage(x1, x2, vcart)

    ## problem dimensions
    nb = len(V)                 ## number of buses
    if il is None:
        il = arange(branch.shape[0])    ## all lines have limits by default
    il = asarray(il, dtype=int64).ravel()
    nl2 = len(il)               ## number of constrained lines

    if not issparse(Yf):
        Yf = sparse(Yf)
    if not issparse(Yt):
        Yt = sparse(Yt)
    _check_branch_admittances(Yf, Yt, nl2, nb)
    muF, muT = _split_multipliers(lam, nl2)
    logger.debug("branch flow Hessian: %i buses, %i constrained branches, %s, %s coordinates"
                 % (nb, nl2, flow_lim.name, "cartesian" if vcart else "polar"))

    ##----- evaluate Hessian of flow constraints -----
    if vcart and flow_lim in NOT_CARTESIAN:
        H11, H12, H21, H22 = branch_flow_hess_kernel(flow_lim, None, V, vcart)
    else:
        Cf, Ct = makeCbr(branch, il, nb)
        if flow_lim == FlowLim.I:
            dFf_dV1, dFf_dV2, dFt_dV1, dFt_dV2, Ff, Ft = dIbr_dV(branch[il, :], Yf, Yt, V, vcart)
        else:
            dFf_dV1, dFf_dV2, dFt_dV1, dFt_dV2, Ff, Ft = dSbr_dV(branch[il, :], Yf, Yt, V, vcart)
        ends = (BranchEnd(Cf, Yf, dFf_dV1, dFf_dV2, Ff, muF),
                BranchEnd(Ct, Yt, dFt_dV1, dFt_dV2, Ft, muT))
        H11, H12, H21, H22 = _sum_branch_ends(flow_lim, ends, V, vcart)

    return vstack([hstack([H11, H12]), hstack([H21, H22])], "csr")
