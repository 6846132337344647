# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Defines constants for named column indices to bus matrix.

Only the columns read by the admittance build are listed here::

    0.  C{BUS_I}       bus number (0-based position in the bus matrix)
    1.  C{BUS_TYPE}    bus type (1 = PQ, 2 = PV, 3 = ref, 4 = isolated)
    4.  C{GS}          Gs, shunt conductance (MW at V = 1.0 p.u.)
    5.  C{BS}          Bs, shunt susceptance (MVAr at V = 1.0 p.u.)
    7.  C{VM}          Vm, voltage magnitude (p.u.)
    8.  C{VA}          Va, voltage angle (degrees)
"""

# define bus types
PQ = 1
PV = 2
REF = 3
NONE = 4

# define the indices
BUS_I = 0    # bus number
BUS_TYPE = 1    # bus type
PD = 2    # Pd, real power demand (MW)
QD = 3    # Qd, reactive power demand (MVAr)
GS = 4    # Gs, shunt conductance (MW at V = 1.0 p.u.)
BS = 5    # Bs, shunt susceptance (MVAr at V = 1.0 p.u.)
BUS_AREA = 6    # area number, 1-100
VM = 7    # Vm, voltage magnitude (p.u.)
VA = 8    # Va, voltage angle (degrees)
BASE_KV = 9    # baseKV, base voltage (kV)
ZONE = 10   # zone, loss zone (1-999)
VMAX = 11   # maxVm, maximum voltage magnitude (p.u.)
VMIN = 12   # minVm, minimum voltage magnitude (p.u.)

bus_cols = 13
