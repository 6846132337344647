# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Evaluates AC branch flow constraints and their Jacobian.
"""

from numpy import arange, asarray, int64, inf, r_
from scipy.sparse import vstack, hstack, issparse, csr_matrix as sparse

from flowhess.auxiliary import _check_state, _check_branch_admittances, _state_to_voltage
from flowhess.dAbr_dV import dAbr_dV
from flowhess.dIbr_dV import dIbr_dV
from flowhess.dSbr_dV import dSbr_dV
from flowhess.idx_brch import RATE_A
from flowhess.options import FlowLim, FlowHessOptions


def opf_branch_flow_fcn(x, baseMVA, branch, Yf, Yt, il=None, options=None):
    """Evaluates AC branch flow constraints and their Jacobian.

    Constraint evaluation function for the branch flow limits, the first
    derivative counterpart of L{opf_branch_flow_hess}.

    @param x: voltage state, the pair (Va, Vm) or, with Cartesian
    coordinates, (Vr, Vi)
    @param baseMVA: system MVA base
    @param branch: branch matrix
    @param Yf: admittance matrix for "from" end of constrained branches
    @param Yt: admittance matrix for "to" end of constrained branches
    @param il: (optional) vector of branch indices corresponding to
    branches with flow limits. The default is C{range(nl)} (all branches).
    @param options: (optional) L{FlowHessOptions}

    @return: C{h} - vector of inequality constraint values flow - limit for
    the "from" ends followed by the "to" ends, where the flow is the squared
    apparent power, squared real power, squared current magnitude or the real
    power, depending on C{options.flow_lim}. A zero C{RATE_A} means the branch
    is unlimited. C{dh} - sparse C{2nb x 2nl2} transposed Jacobian, column j
    is the gradient of h(j).

    @author: Ray Zimmerman (PSERC Cornell)
    @author: Carlos E. Murillo-Sanchez (PSERC Cornell & Universidad
    Autonoma de Manizales)
    """
    if options is None:
        options = FlowHessOptions()
    flow_lim = FlowLim.from_value(options.flow_lim)
    vcart = options.v_cartesian

    ## reconstruct V
    x1, x2 = _check_state(x)
    V = _state_to_voltage(x1, x2, vcart)

    ## problem dimensions
    nb = len(V)
    if il is None:
        il = arange(branch.shape[0])
    il = asarray(il, dtype=int64).ravel()
    nl2 = len(il)

    if not issparse(Yf):
        Yf = sparse(Yf)
    if not issparse(Yt):
        Yt = sparse(Yt)
    _check_branch_admittances(Yf, Yt, nl2, nb)

    if nl2 == 0:
        return asarray([], dtype=float), sparse((2 * nb, 0))

    ## branch flow limits
    if flow_lim == FlowLim.P:
        flow_max = branch[il, RATE_A].real / baseMVA
    else:
        flow_max = (branch[il, RATE_A].real / baseMVA)**2
    flow_max[flow_max == 0] = inf

    ## flows and their partials w.r.t. V
    if flow_lim == FlowLim.I:
        dFf_dV1, dFf_dV2, dFt_dV1, dFt_dV2, Ff, Ft = dIbr_dV(branch[il, :], Yf, Yt, V, vcart)
    else:
        dFf_dV1, dFf_dV2, dFt_dV1, dFt_dV2, Ff, Ft = dSbr_dV(branch[il, :], Yf, Yt, V, vcart)
    if flow_lim in (FlowLim.P2, FlowLim.P):     ## real part of flow (active power)
        dFf_dV1 = dFf_dV1.real
        dFf_dV2 = dFf_dV2.real
        dFt_dV1 = dFt_dV1.real
        dFt_dV2 = dFt_dV2.real
        Ff = Ff.real
        Ft = Ft.real

    if flow_lim == FlowLim.P:
        h = r_[Ff - flow_max,       ## branch P limits (from bus)
               Ft - flow_max]       ## branch P limits (to bus)
        df_dV1, df_dV2, dt_dV1, dt_dV2 = dFf_dV1, dFf_dV2, dFt_dV1, dFt_dV2
    else:
        ## squared magnitude of flow (of complex power or current, or real power)
        h = r_[(Ff * Ff.conj()).real - flow_max,    ## branch limits (from bus)
               (Ft * Ft.conj()).real - flow_max]    ## branch limits (to bus)
        df_dV1, df_dV2, dt_dV1, dt_dV2 = \
            dAbr_dV(dFf_dV1, dFf_dV2, dFt_dV1, dFt_dV2, Ff, Ft)

    ## construct Jacobian of inequality constraints (branch limits)
    ## and transpose it.
    dh = vstack([
        hstack([df_dV1, df_dV2]),    ## "from" flow limit
        hstack([dt_dV1, dt_dV2])     ## "to" flow limit
    ], "csr").T.tocsr()

    return h, dh
