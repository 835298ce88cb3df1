import numpy as np
from .pyfft import Fouriert, fwdtransform, invtransform
from .params import Params
from .variables import Vars, updatevars
from .tendency import Equation
from . import diagnostics

class Clock(object):
    """time step, current time and number of steps taken"""
    def __init__(self, dt, t=0., step=0):
        self.dt = dt
        self.t = t
        self.step = step

class Problem(object):
    """
    multi-layer QG problem on a doubly periodic domain.

    sol (spectral pv, shape (nlayers, nl, nkr)) is the model state.
    everything in vars is derived from it, and is only guaranteed to be
    consistent with it after updatevars (or set_q/set_psi).

    time stepping is 4th order Runge-Kutta with implicit "integrating
    factor" treatment of hyperviscosity.
    """
    def __init__(self, nx=128, Lx=2.*np.pi, ny=None, Ly=None, dt=0.01,
                 nlayers=2, f0=1.0, beta=0.0, g=1.0, U=0.0, H=None,
                 rho=None, eta=None, mu=0.0, nu=0.0, nnu=1, calcFq=None,
                 linear=False, precision='double', threads=1, tstart=0.):
        if dt is None: # time step must be specified
            raise ValueError('must specify time step')
        # default layer thicknesses and densities, each set independently
        defaults = {1: ([1.0], [1.0]), 2: ([0.2, 0.8], [4.0, 5.0])}
        if (H is None or rho is None) and nlayers not in defaults:
            raise ValueError('must specify H and rho for more than 2 layers')
        if H is None: H = defaults[nlayers][0]
        if rho is None: rho = defaults[nlayers][1]
        self.grid = Fouriert(nx, Lx, ny=ny, Ly=Ly, nlayers=nlayers,
                             precision=precision, threads=threads)
        grid = self.grid
        self.params = Params(nlayers, g, f0, beta, rho, H, U, eta, mu, nu,
                             nnu, grid, calcFq=calcFq)
        self.vars = Vars(grid, nlayers, forced=self.params.forced)
        self.linear = linear
        self.eqn = Equation.for_problem(self.params, grid, linear=linear)
        self.clock = Clock(dt, t=tstart)
        self.sol = np.zeros((nlayers, grid.nl, grid.nkr), grid.cdtype)
        # integrating factor for hyperviscosity
        self.hyperdiff = np.exp(dt*self.eqn.L)

    @property
    def t(self):
        return self.clock.t

    @property
    def dt(self):
        return self.clock.dt

    def updatevars(self):
        """recompute q, psi, u, v (grid and spectral) from sol"""
        updatevars(self.vars, self.params, self.grid, self.sol)

    def set_q(self, q):
        """set sol from grid pv q (area mean removed in each layer)"""
        fwdtransform(self.vars.qh, q, self.grid)
        self.vars.qh[:,0,0] = 0.
        self.sol[...] = self.vars.qh
        self.updatevars()

    def set_psi(self, psi):
        """set sol to the pv corresponding to grid streamfunction psi"""
        vars = self.vars
        fwdtransform(vars.psih, psi, self.grid)
        self.params.stretching.pvfromstreamfunction(vars.qh, vars.psih)
        invtransform(vars.q, vars.qh, self.grid)
        self.set_q(vars.q)

    def energies(self):
        return diagnostics.energies(self.vars, self.params, self.grid, self.sol)

    def fluxes(self):
        return diagnostics.fluxes(self.vars, self.params, self.grid, self.sol)

    def gettend(self, sol=None, t=None):
        """tendency of spectral pv (excluding hyperviscosity)"""
        if sol is None: sol = self.sol
        if t is None: t = self.clock.t
        N = np.empty_like(sol)
        self.eqn.calcN(N, sol, t, self.clock, self.vars, self.params, self.grid)
        return N

    def timestep(self):
        # update pv using 4th order runge-kutta time step with
        # implicit "integrating factor" treatment of hyperviscosity.
        dt = self.clock.dt; t = self.clock.t
        k1 = dt*self.gettend(self.sol, t)
        k2 = dt*self.gettend(self.sol + 0.5*k1, t + 0.5*dt)
        k3 = dt*self.gettend(self.sol + 0.5*k2, t + 0.5*dt)
        k4 = dt*self.gettend(self.sol + k3, t + dt)
        self.sol[...] = self.hyperdiff*(self.sol + (k1+2.*k2+2.*k3+k4)/6.)
        self.clock.t += dt # increment time
        self.clock.step += 1

    def advance(self, timesteps=1):
        """advance timesteps time steps, return pv on the grid"""
        for n in range(timesteps):
            self.timestep()
        self.updatevars()
        return self.vars.q.copy()
