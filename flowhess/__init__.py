import os
fh_dir = os.path.dirname(os.path.realpath(__file__))

from flowhess._version import __version__
from flowhess.auxiliary import FlowHessException, FlowHessShapeError, UnknownFlowLimit
from flowhess.options import FlowLim, FlowHessOptions
from flowhess.makeCbr import makeCbr
from flowhess.makeYbus import makeYbus
from flowhess.opf_branch_flow_fcn import opf_branch_flow_fcn
from flowhess.opf_branch_flow_hess import opf_branch_flow_hess
from flowhess.hess_check import check_branch_flow_hess
