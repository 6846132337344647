# -*- coding: utf-8 -*-

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Options selecting the limited branch flow quantity and the voltage coordinates.
"""

import enum
from typing import NamedTuple

from flowhess.auxiliary import UnknownFlowLimit


class FlowLim(enum.IntEnum):
    """
    Quantity bounded by the branch flow limits.

    The integer values 0 - 2 are the ones of the PYPOWER option OPF_FLOW_LIM.
    """
    S = 0   # apparent power squared, |S|**2
    P2 = 1  # real power squared, P**2
    I = 2   # current magnitude squared, |I|**2
    P = 3   # real power, P

    @classmethod
    def from_value(cls, value):
        """
        Returns the member for a member, an integer or a MATPOWER code ('S', '2', 'I', 'P').

        MATPOWER only looks at the first character of the code, so do we.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            code = value[:1].upper()
            for member in cls:
                if _MATPOWER_CODES[member] == code:
                    return member
            raise UnknownFlowLimit("%r is not a valid branch flow limit type" % value)
        for member in cls:
            if member.value == value:
                return member
        raise UnknownFlowLimit("%r is not a valid branch flow limit type" % value)


_MATPOWER_CODES = {FlowLim.S: "S", FlowLim.P2: "2", FlowLim.I: "I", FlowLim.P: "P"}


class FlowHessOptions(NamedTuple):
    """
    Per call configuration of the branch flow Hessian.

    flow_lim (FlowLim, FlowLim.S) - quantity limited by the branch flow constraints

    v_cartesian (bool, False) - if True, the voltage state is (Vr, Vi) instead of (Va, Vm)
    """
    flow_lim: FlowLim = FlowLim.S
    v_cartesian: bool = False

    @classmethod
    def create(cls, flow_lim=FlowLim.S, v_cartesian=False):
        return cls(FlowLim.from_value(flow_lim), bool(v_cartesian))

    @classmethod
    def from_ppopt(cls, ppopt):
        """
        Reads OPF_FLOW_LIM and OPF_V_CART from a PYPOWER style options dict.
        """
        return cls.create(ppopt.get("OPF_FLOW_LIM", FlowLim.S), ppopt.get("OPF_V_CART", False))
