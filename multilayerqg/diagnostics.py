import numpy as np
from .pyfft import invtransform
from .variables import updatevars

def energies(vars, params, grid, sol):
    """
    kinetic energy of each layer and potential energy of each interface,
    as domain averages. Returns (KE, PE) arrays of length nlayers and
    nlayers-1, or just the (scalar) KE for a single layer.
    KE of layer j is weighted by H[j]/sum(H).
    vars.qh, vars.psih and vars.uh are overwritten.
    """
    vars.qh[...] = sol
    params.stretching.streamfunctionfrompv(vars.psih, vars.qh)
    norm = 1./(2.*grid.Lx*grid.Ly)
    vars.uh[...] = grid.Krsq*np.abs(vars.psih)**2
    if params.nlayers == 1:
        return norm*grid.parsevalsum(vars.uh[0])
    KE = norm*grid.parsevalsum(vars.uh)*params.H/params.H.sum()
    PE = np.empty(params.nlayers-1, KE.dtype)
    for j in range(params.nlayers-1):
        PE[j] = norm*params.f0**2/params.gprime[j]*\
                grid.parsevalsum2(vars.psih[j+1]-vars.psih[j])
    return KE, PE

def fluxes(vars, params, grid, sol):
    """
    lateral eddy flux H*U*v*du/dy in each layer and vertical eddy flux
    f0**2/g'*(U[j]-U[j+1])*v[j+1]*psi[j] across each interface, domain
    averaged and divided by the total depth.
    all fields in vars are refreshed from sol; on return vars.u holds
    du/dy.
    """
    updatevars(vars, params, grid, sol)
    vars.uh *= grid.il
    invtransform(vars.u, vars.uh, grid)
    H = params.H[:,np.newaxis,np.newaxis]
    norm = grid.dx*grid.dy/(grid.Lx*grid.Ly*params.H.sum())
    lateralfluxes = norm*(H*params.U*vars.v*vars.u).sum(axis=(1,2))
    verticalfluxes = np.empty(params.nlayers-1, lateralfluxes.dtype)
    for j in range(params.nlayers-1):
        verticalfluxes[j] = norm*(params.f0**2/params.gprime[j]*\
                (params.U[j]-params.U[j+1])*vars.v[j+1]*vars.psi[j]).sum()
    return lateralfluxes, verticalfluxes
