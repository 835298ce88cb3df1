"""
right-hand side of the layered QG pv equation,

dq/dt = -d[(U+u)q]/dx - d[vq]/dy - (U+u)*dQ/dx - v*dQ/dy
        + drag (bottom layer) + forcing + L*q

evaluated pseudospectrally: derivatives are taken in spectral space,
products are formed on the grid. L (hyperviscosity) is linear and
diagonal in spectral space, so it is left to the time stepper.
"""
import numpy as np
from .pyfft import fwdtransform, invtransform

def hyperdissipation(params, grid):
    """linear operator L = -nu*K**(2*nnu) for each layer (zero for K=0)"""
    L = np.empty((params.nlayers,grid.nl,grid.nkr),grid.cdtype)
    L[...] = -params.nu*grid.Krsq**params.nnu
    L[:,0,0] = 0.
    return L

def calcN(N, sol, t, clock, vars, params, grid):
    """nonlinear tendency, written into N"""
    calcN_advection(N, sol, vars, params, grid)
    N[-1] += params.mu*grid.Krsq*vars.psih[-1] # bottom linear drag
    addforcing(N, sol, t, clock, vars, params, grid)

def calcNlinear(N, sol, t, clock, vars, params, grid):
    """tendency of the equations linearized about the imposed flow"""
    calcN_linearadvection(N, sol, vars, params, grid)
    N[-1] += params.mu*grid.Krsq*vars.psih[-1] # bottom linear drag
    addforcing(N, sol, t, clock, vars, params, grid)

def _advectmean(N, sol, vars, params, grid):
    # advection of the background pv gradients, shared by the
    # nonlinear and linear tendencies.
    # on return vars.q holds the grid pv and vars.u, vars.v the
    # total zonal and the meridional velocity.
    vars.qh[...] = sol
    params.stretching.streamfunctionfrompv(vars.psih, vars.qh)
    vars.uh[...] = -grid.il*vars.psih
    vars.vh[...] = grid.ik*vars.psih

    invtransform(vars.u, vars.uh, grid)
    vars.u += params.U # add the imposed zonal flow U
    vars.q[...] = vars.u*params.Qx
    fwdtransform(vars.uh, vars.q, grid)
    N[...] = -vars.uh # -(U+u)*dQ/dx

    invtransform(vars.v, vars.vh, grid)
    vars.q[...] = vars.v*params.Qy
    fwdtransform(vars.vh, vars.q, grid)
    N -= vars.vh # -v*dQ/dy

    invtransform(vars.q, vars.qh, grid)

def calcN_advection(N, sol, vars, params, grid):
    """advection terms of the nonlinear equations"""
    _advectmean(N, sol, vars, params, grid)
    vars.u *= vars.q # (U+u)*q
    vars.v *= vars.q # v*q
    fwdtransform(vars.uh, vars.u, grid)
    fwdtransform(vars.vh, vars.v, grid)
    N -= grid.ik*vars.uh + grid.il*vars.vh # -d[(U+u)q]/dx - d[vq]/dy

def calcN_linearadvection(N, sol, vars, params, grid):
    """advection terms of the linearized equations"""
    _advectmean(N, sol, vars, params, grid)
    vars.u[...] = params.U
    vars.u *= vars.q # U*q
    fwdtransform(vars.uh, vars.u, grid)
    N -= grid.ik*vars.uh # -d[Uq]/dx

def addforcing(N, sol, t, clock, vars, params, grid):
    """add forcing computed by params.calcFq (no-op when unforced)"""
    if not vars.forced:
        return
    params.calcFq(vars.Fqh, sol, t, clock, vars, params, grid)
    N += vars.Fqh

class Equation(object):
    """
    linear operator L and tendency function calcN of the pv equation,
    in the form consumed by a time stepper:
    dsol/dt = L*sol + calcN(sol).
    """
    def __init__(self, L, calcN, grid):
        self.L = L
        self.calcN = calcN
        self.grid = grid

    @classmethod
    def for_problem(cls, params, grid, linear=False):
        if linear:
            return cls(hyperdissipation(params, grid), calcNlinear, grid)
        else:
            return cls(hyperdissipation(params, grid), calcN, grid)
