# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Numerical check of the branch flow constraint Hessian using (central) finite differences.
"""

import logging

from numpy import asarray, zeros, r_

from flowhess.auxiliary import _check_state
from flowhess.opf_branch_flow_fcn import opf_branch_flow_fcn
from flowhess.opf_branch_flow_hess import opf_branch_flow_hess

logger = logging.getLogger(__name__)


def check_branch_flow_hess(x, lam, baseMVA, branch, Yf, Yt, il=None, options=None, step=1e-5,
                           tol=1e-6):
    """
    Compares the analytic Hessian of the branch flow constraints with central finite
    differences of the weighted constraint gradient dh * lam.

    INPUT:
        **x** (tuple) - voltage state (Va, Vm) or (Vr, Vi)

        **lam** (array) - multipliers on the "from" and "to" flow limits

        **baseMVA**, **branch**, **Yf**, **Yt**, **il**, **options** - as for
        opf_branch_flow_hess and opf_branch_flow_fcn

    OPTIONAL:
        **step** (float, 1e-5) - total width of the central difference

        **tol** (float, 1e-6) - a warning is logged if the largest difference exceeds tol times
        the largest numerical entry (at least tol)

    OUTPUT:
        **d2H** (csr_matrix) - analytic Hessian

        **num_d2H** (ndarray) - numerical Hessian

        **max_err** (float) - largest absolute difference between the two
    """
    x1, x2 = _check_state(x)
    nb = len(x1)
    lam = asarray(lam, dtype=float).ravel()

    def weighted_gradient(xx):
        _, dh = opf_branch_flow_fcn((xx[:nb], xx[nb:]), baseMVA, branch, Yf, Yt, il, options)
        if len(lam) == 0:
            return zeros(2 * nb)
        return dh * lam

    d2H = opf_branch_flow_hess((x1, x2), lam, branch, Yf, Yt, il, options)

    xx = r_[x1, x2]
    num_d2H = zeros((2 * nb, 2 * nb))
    for i in range(2 * nb):
        xp = xx.copy()
        xm = xx.copy()
        xp[i] = xx[i] + step / 2
        xm[i] = xx[i] - step / 2
        num_d2H[:, i] = (weighted_gradient(xp) - weighted_gradient(xm)) / step

    max_err = abs(d2H.toarray() - num_d2H).max()
    if max_err > tol * max(1., abs(num_d2H).max()):
        logger.warning("Max difference in d2H: %g" % max_err)
    return d2H, num_d2H, max_err
