# -*- coding: utf-8 -*-

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.


import logging

import numpy as np
import pytest

from flowhess import opf_branch_flow_hess, check_branch_flow_hess, FlowLim, FlowHessOptions, \
    FlowHessShapeError
from flowhess.test.helper_functions import state, assert_close

SUPPORTED = [(FlowLim.S, False), (FlowLim.S, True), (FlowLim.P2, False), (FlowLim.I, False),
             (FlowLim.P, False)]


def _hess(case, lam, flow_lim=FlowLim.S, v_cartesian=False, il=None):
    il = case["il"] if il is None else il
    return opf_branch_flow_hess(state(case, v_cartesian), lam, case["branch"], case["Yf"],
                                case["Yt"], il, FlowHessOptions(flow_lim, v_cartesian))


def test_lossless_three_bus_apparent_power(lossless_three_bus_case):
    """
    For a lossless line with series reactance x, b = 1 / x, a = |Vf|, c = |Vt| and
    d = Va_f - Va_t

        |Sf|**2 = b**2 * (a**4 - 2 * a**3 * c * cos(d) + a**2 * c**2)
        |St|**2 = b**2 * (c**4 - 2 * a * c**3 * cos(d) + a**2 * c**2)

    At a = c = 1 and d = pi / 3 the Hessian of |Sf|**2 + |St|**2 w.r.t. (d, a, c) is
    b**2 * [[2, 4 r, 4 r], [4 r, 10, 2], [4 r, 2, 10]] with r = sqrt(3).
    """
    r = np.sqrt(3)
    expected = np.array([
        [2., -2., 0., 4 * r, 4 * r, 0.],
        [-2., 10., -8., -4 * r, 12 * r, 16 * r],
        [0., -8., 8., 0., -16 * r, -16 * r],
        [4 * r, -4 * r, 0., 10., 2., 0.],
        [4 * r, 12 * r, -16 * r, 2., 50., 8.],
        [0., 16 * r, -16 * r, 0., 8., 40.],
    ])

    d2H = _hess(lossless_three_bus_case, np.ones(4))
    assert d2H.shape == (6, 6)
    assert d2H.format == "csr"
    assert np.allclose(d2H.toarray(), expected, rtol=0., atol=1e-10)


@pytest.mark.parametrize("flow_lim, v_cartesian", SUPPORTED)
def test_symmetric(four_bus_case, four_bus_multipliers, flow_lim, v_cartesian):
    d2H = _hess(four_bus_case, four_bus_multipliers, flow_lim, v_cartesian).toarray()
    assert d2H.shape == (8, 8)
    assert not np.iscomplexobj(d2H)
    assert np.any(d2H)
    assert np.allclose(d2H, d2H.T, rtol=0., atol=1e-10 * np.abs(d2H).max())


def test_cartesian_blocks(four_bus_case, four_bus_multipliers):
    d2H = _hess(four_bus_case, four_bus_multipliers, FlowLim.S, True).toarray()
    Hrr, Hri, Hir, Hii = d2H[:4, :4], d2H[:4, 4:], d2H[4:, :4], d2H[4:, 4:]
    assert np.allclose(Hri, Hir.T)
    assert np.allclose(Hrr, Hrr.T)
    assert np.allclose(Hii, Hii.T)


@pytest.mark.parametrize("flow_lim, v_cartesian", SUPPORTED)
def test_zero_multipliers(four_bus_case, flow_lim, v_cartesian):
    d2H = _hess(four_bus_case, np.zeros(6), flow_lim, v_cartesian)
    assert d2H.shape == (8, 8)
    assert not np.any(d2H.toarray())


@pytest.mark.parametrize("flow_lim", list(FlowLim))
@pytest.mark.parametrize("v_cartesian", [False, True])
def test_no_constrained_branches(four_bus_case, flow_lim, v_cartesian):
    c = four_bus_case
    d2H = opf_branch_flow_hess(state(c, v_cartesian), np.zeros(0), c["branch"], c["Yf"][:0, :],
                               c["Yt"][:0, :], [], FlowHessOptions(flow_lim, v_cartesian))
    assert d2H.shape == (8, 8)
    assert d2H.nnz == 0


def test_empty_multipliers_with_constrained_branches(four_bus_case):
    d2H = _hess(four_bus_case, [])
    assert d2H.shape == (8, 8)
    assert d2H.nnz == 0


@pytest.mark.parametrize("flow_lim, v_cartesian", SUPPORTED)
def test_linear_in_multipliers(four_bus_case, four_bus_multipliers, flow_lim, v_cartesian):
    d2H = _hess(four_bus_case, four_bus_multipliers, flow_lim, v_cartesian).toarray()
    d2H_scaled = _hess(four_bus_case, 3.7 * four_bus_multipliers, flow_lim, v_cartesian).toarray()
    assert np.allclose(d2H_scaled, 3.7 * d2H, rtol=1e-10, atol=1e-10 * np.abs(d2H).max())


@pytest.mark.parametrize("flow_lim, v_cartesian", SUPPORTED)
def test_from_to_additive(four_bus_case, four_bus_multipliers, flow_lim, v_cartesian):
    lam_from = four_bus_multipliers.copy()
    lam_from[3:] = 0.
    lam_to = four_bus_multipliers.copy()
    lam_to[:3] = 0.

    d2H = _hess(four_bus_case, four_bus_multipliers, flow_lim, v_cartesian)
    d2H_from = _hess(four_bus_case, lam_from, flow_lim, v_cartesian)
    d2H_to = _hess(four_bus_case, lam_to, flow_lim, v_cartesian)
    assert_close(d2H, d2H_from + d2H_to, rtol=1e-12)


def test_untouched_buses_have_no_curvature(four_bus_case):
    # only the "from" end of branch 0 (0 -> 1) carries a multiplier
    lam = np.array([1., 0., 0., 0., 0., 0.])
    d2H = _hess(four_bus_case, lam).toarray()
    touched = np.zeros(8, dtype=bool)
    touched[[0, 1, 4, 5]] = True
    assert np.any(d2H[np.ix_(touched, touched)])
    assert not np.any(d2H[~touched, :])
    assert not np.any(d2H[:, ~touched])


@pytest.mark.parametrize("flow_lim, v_cartesian", SUPPORTED)
def test_finite_differences_two_bus(two_bus_case, flow_lim, v_cartesian, caplog):
    c = two_bus_case
    lam = np.array([0.8, 1.7])
    with caplog.at_level(logging.WARNING):
        d2H, num_d2H, max_err = check_branch_flow_hess(
            state(c, v_cartesian), lam, c["baseMVA"], c["branch"], c["Yf"], c["Yt"],
            options=FlowHessOptions(flow_lim, v_cartesian))
    assert max_err <= 1e-6 * max(1., np.abs(num_d2H).max())
    assert "Max difference" not in caplog.text
    assert np.any(d2H.toarray())


@pytest.mark.parametrize("flow_lim, v_cartesian", SUPPORTED)
def test_finite_differences_four_bus(four_bus_case, four_bus_multipliers, flow_lim, v_cartesian):
    c = four_bus_case
    _, num_d2H, max_err = check_branch_flow_hess(
        state(c, v_cartesian), four_bus_multipliers, c["baseMVA"], c["branch"], c["Yf"], c["Yt"],
        c["il"], FlowHessOptions(flow_lim, v_cartesian))
    assert max_err <= 1e-6 * max(1., np.abs(num_d2H).max())


@pytest.mark.parametrize("flow_lim", [FlowLim.I, FlowLim.P2, FlowLim.P])
def test_cartesian_not_supported_warns(four_bus_case, four_bus_multipliers, flow_lim, caplog):
    with caplog.at_level(logging.WARNING, logger="flowhess.opf_branch_flow_hess"):
        d2H = _hess(four_bus_case, four_bus_multipliers, flow_lim, True)
    assert "not calculated in Cartesian coordinates" in caplog.text
    assert d2H.shape == (8, 8)
    assert not np.any(d2H.toarray())


def test_dense_admittances(four_bus_case, four_bus_multipliers):
    c = four_bus_case
    d2H = _hess(c, four_bus_multipliers)
    d2H_dense = opf_branch_flow_hess(c["x_polar"], four_bus_multipliers, c["branch"],
                                     c["Yf"].toarray(), c["Yt"].toarray(), c["il"])
    assert np.allclose(d2H.toarray(), d2H_dense.toarray())


def test_identical_inputs_identical_output(four_bus_case, four_bus_multipliers):
    first = _hess(four_bus_case, four_bus_multipliers).toarray()
    second = _hess(four_bus_case, four_bus_multipliers).toarray()
    assert np.array_equal(first, second)


def test_default_constrained_branches(two_bus_case):
    c = two_bus_case
    lam = np.array([0.5, 0.25])
    d2H = opf_branch_flow_hess(c["x_polar"], lam, c["branch"], c["Yf"], c["Yt"])
    d2H_il = opf_branch_flow_hess(c["x_polar"], lam, c["branch"], c["Yf"], c["Yt"], [0],
                                  FlowHessOptions.create("S", False))
    assert np.array_equal(d2H.toarray(), d2H_il.toarray())


def test_shape_mismatch(four_bus_case, four_bus_multipliers):
    c = four_bus_case
    x = c["x_polar"]
    with pytest.raises(FlowHessShapeError):
        opf_branch_flow_hess(x, four_bus_multipliers[:5], c["branch"], c["Yf"], c["Yt"], c["il"])
    with pytest.raises(FlowHessShapeError):
        opf_branch_flow_hess(x, four_bus_multipliers[:4], c["branch"], c["Yf"], c["Yt"], c["il"])
    with pytest.raises(FlowHessShapeError):
        opf_branch_flow_hess(x, four_bus_multipliers, c["branch"], c["Yf"][:2, :], c["Yt"],
                             c["il"])
    with pytest.raises(FlowHessShapeError):
        opf_branch_flow_hess((x[0], x[1][:3]), four_bus_multipliers, c["branch"], c["Yf"],
                             c["Yt"], c["il"])
    with pytest.raises(FlowHessShapeError):
        opf_branch_flow_hess((x[0], x[1], x[1]), four_bus_multipliers, c["branch"], c["Yf"],
                             c["Yt"], c["il"])
    # also a ValueError for callers not aware of the flowhess exceptions
    with pytest.raises(ValueError):
        opf_branch_flow_hess(x, four_bus_multipliers, c["branch"], c["Yf"], c["Yt"], [0, 2])


if __name__ == "__main__":
    pytest.main([__file__, "-xs"])
