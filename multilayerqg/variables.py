import numpy as np
from .pyfft import invtransform

class Vars(object):
    """
    grid and spectral fields of a layered QG problem.

    q, psi, u, v have shape (nlayers, ny, nx); qh, psih, uh, vh (and Fqh,
    present only when forced=True) have shape (nlayers, nl, nkr).

    these are scratch space for the tendency and diagnostic calculations,
    which overwrite them. Only after updatevars do they all hold fields
    consistent with the solution.
    """
    def __init__(self, grid, nlayers, forced=False):
        self.forced = forced
        shape = (nlayers, grid.ny, grid.nx)
        shapeh = (nlayers, grid.nl, grid.nkr)
        self.q = np.zeros(shape, grid.dtype)
        self.psi = np.zeros(shape, grid.dtype)
        self.u = np.zeros(shape, grid.dtype)
        self.v = np.zeros(shape, grid.dtype)
        self.qh = np.zeros(shapeh, grid.cdtype)
        self.psih = np.zeros(shapeh, grid.cdtype)
        self.uh = np.zeros(shapeh, grid.cdtype)
        self.vh = np.zeros(shapeh, grid.cdtype)
        if forced:
            self.Fqh = np.zeros(shapeh, grid.cdtype)
        else:
            self.Fqh = None

def updatevars(vars, params, grid, sol):
    """refresh all fields in vars from the spectral pv sol (not modified)"""
    vars.qh[...] = sol
    params.stretching.streamfunctionfrompv(vars.psih, vars.qh)
    vars.uh[...] = -grid.il*vars.psih
    vars.vh[...] = grid.ik*vars.psih
    invtransform(vars.q, vars.qh, grid)
    invtransform(vars.psi, vars.psih, grid)
    invtransform(vars.u, vars.uh, grid)
    invtransform(vars.v, vars.vh, grid)
