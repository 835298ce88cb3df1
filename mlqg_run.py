from multilayerqg import Problem
import numpy as np
import time

# run a 2-layer baroclinically unstable QG turbulence simulation,
# printing energies and fluxes as it goes.

# model parameters.

#nx = 256 # number of grid points in each direction
#dt = 2.5e-3 # time step

nx = 128
dt = 5.e-3

nlayers = 2
Lx = 2.*np.pi # domain size
f0 = 1.0; g = 1.0
beta = 5.0 # planetary vorticity gradient
H = [0.2, 0.8] # rest layer thicknesses
rho = [4.0, 5.0] # layer densities
U = [1.0, 0.0] # imposed zonal flow in each layer
mu = 5.e-2 # bottom drag
nu = 1.e-14; nnu = 4 # hyperviscosity coefficient and order

model = Problem(nx=nx, Lx=Lx, dt=dt, nlayers=nlayers, f0=f0, g=g, beta=beta,
                U=U, H=H, rho=rho, mu=mu, nu=nu, nnu=nnu)

# create random noise in each layer
rs = np.random.RandomState(42) # fixed seed
q = 1.e-2*rs.normal(size=(nlayers,nx,nx))
model.set_q(q)

outputinterval = 1.0 # interval between output
tmax = 50. # time to stop
# set number of timesteps to integrate for each call to model.advance
ntimesteps = int(outputinterval/model.dt)

t1 = time.time()
while model.t < tmax:
    q = model.advance(timesteps=ntimesteps)
    KE, PE = model.energies()
    lateralfluxes, verticalfluxes = model.fluxes()
    print('t = %6.2f q min/max = %10.4g %10.4g' % (model.t,q.min(),q.max()))
    print('  KE =',KE,'PE =',PE)
    print('  lateral fluxes =',lateralfluxes,'vertical fluxes =',verticalfluxes)
    if not np.isfinite(KE).all():
        print('model blew up at t = %g' % model.t)
        break
t2 = time.time()
print('all done %g secs' % (t2-t1))
