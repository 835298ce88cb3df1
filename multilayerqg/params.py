import numpy as np
from .stretching import StretchingOperator

def reducedgravity(g, rho):
    """
    reduced gravity at each of the len(rho)-1 interfaces,
    g' = g*(rho[i+1]-rho[i])/rho[i+1].
    """
    rho = np.asarray(rho, np.float64)
    # normalized by the density of the lower layer (pyqg normalizes
    # by the upper layer).
    return g*(rho[1:]-rho[:-1])/rho[1:]

class Params(object):
    """
    physical parameters of the layered QG model, plus quantities derived
    from them once at setup: background pv gradients Qx,Qy, reduced
    gravities, layer coupling coefficients and the stretching operator.

    nlayers: number of layers (1 = barotropic)
    g: gravity
    f0: constant planetary vorticity
    beta: planetary vorticity y-gradient
    rho: density of each layer (top to bottom, strictly increasing)
    H: rest thickness of each layer
    U: imposed zonal flow. Scalar, one value per layer, U(y) (single layer
       only, length ny) or array with shape (nlayers, ny)
    eta: topographic pv on the grid, shape (ny, nx) (bottom layer only)
    mu: linear bottom drag
    nu: (hyper)viscosity coefficient
    nnu: order of hyperviscosity (1 = plain viscosity)
    grid: Fouriert instance with layered transforms for nlayers layers
    calcFq: forcing function calcFq(Fqh, sol, t, clock, vars, params, grid)
            that fills Fqh in place, or None for no forcing
    """
    def __init__(self, nlayers, g, f0, beta, rho, H, U, eta, mu, nu, nnu, grid, calcFq=None):
        if int(nlayers) != nlayers or nlayers < 1:
            raise ValueError('nlayers must be a positive integer')
        nlayers = int(nlayers)
        if grid.nlayers != nlayers:
            raise ValueError('grid transforms set up for %s layers, not %s' % (grid.nlayers, nlayers))
        H = np.array(H, np.float64).ravel()
        rho = np.array(rho, np.float64).ravel()
        if len(H) != nlayers:
            raise ValueError('H must have one value per layer')
        if len(rho) != nlayers:
            raise ValueError('rho must have one value per layer')
        if np.any(H <= 0.):
            raise ValueError('layer thicknesses H must be positive')
        if np.any(np.diff(rho) <= 0.):
            raise ValueError('rho must increase strictly downward')
        if nnu < 1:
            raise ValueError('nnu must be >= 1')
        dtype = grid.dtype
        self.nlayers = nlayers
        self.g = dtype.type(g)
        self.f0 = dtype.type(f0)
        self.beta = dtype.type(beta)
        self.rho = rho.astype(dtype)
        self.H = H.astype(dtype)
        self.mu = dtype.type(mu)
        self.nu = dtype.type(nu)
        self.nnu = int(nnu)
        self.calcFq = calcFq
        self.U = self._layeredflow(U, grid)
        if eta is None:
            eta = np.zeros((grid.ny,grid.nx), dtype)
        eta = np.asarray(eta, dtype)
        if eta.shape != (grid.ny,grid.nx):
            raise ValueError('eta must have shape (ny, nx)')
        self.eta = eta

        # curvature of the imposed flow, computed spectrally.
        U = self.U*np.ones((nlayers,grid.ny,grid.nx),dtype)
        Uyy = grid.spectogrd(-grid.l**2*grid.grdtospec(U))
        etax, etay = grid.getgrad(grid.grdtospec(eta))

        # background pv gradients (topography only felt by bottom layer)
        self.Qx = np.zeros((nlayers,grid.ny,grid.nx),dtype)
        self.Qx[-1] += etax
        self.Qy = self.beta - Uyy
        self.Qy[-1] += etay

        if nlayers == 1:
            self.gprime = np.zeros(0,dtype)
            self.Fp = np.zeros(0,dtype)
            self.Fm = np.zeros(0,dtype)
        else:
            self.gprime = reducedgravity(self.g, self.rho).astype(dtype)
            self.Fp = self.f0**2/(self.gprime*self.H[:-1])
            self.Fm = self.f0**2/(self.gprime*self.H[1:])
            Fp = self.Fp; Fm = self.Fm
            self.Qy[0] -= Fp[0]*(U[1]-U[0])
            for j in range(1,nlayers-1):
                self.Qy[j] -= Fp[j]*(U[j+1]-U[j]) + Fm[j-1]*(U[j-1]-U[j])
            self.Qy[-1] -= Fm[-1]*(U[-2]-U[-1])

        self.stretching = StretchingOperator(nlayers, self.Fp, self.Fm, grid)

    @property
    def forced(self):
        return self.calcFq is not None

    def _layeredflow(self, U, grid):
        # reshape imposed flow to (nlayers, ny, 1)
        nlayers = self.nlayers
        U = np.asarray(U, grid.dtype)
        if U.ndim == 0:
            U = U*np.ones((nlayers,grid.ny),grid.dtype)
        elif U.ndim == 1 and len(U) == nlayers:
            U = U[:,np.newaxis]*np.ones((nlayers,grid.ny),grid.dtype)
        elif U.ndim == 1 and nlayers == 1 and len(U) == grid.ny:
            U = U[np.newaxis,:]
        elif U.shape != (nlayers,grid.ny):
            raise ValueError('U must be a scalar, have length nlayers, or have shape (nlayers, ny)')
        return np.array(U[...,np.newaxis], grid.dtype)
