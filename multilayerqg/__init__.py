"""
multi-layer quasi-geostrophic (QG) model on a doubly periodic f- or
beta-plane, with imposed zonal flow in each layer, bottom topography,
linear bottom drag and hyperviscosity.

layers are numbered from the top. pv in each layer is related to the
streamfunction by a per-wavenumber stretching matrix that couples
neighboring layers through the reduced gravity of each interface.

FFT spectral collocation method (no dealiasing) with 4th order Runge
Kutta time stepping (hyperviscosity treated implicitly).

References:
https://pyqg.readthedocs.io/en/latest/equations/notation_layered_model.html
"""
from .pyfft import Fouriert, fwdtransform, invtransform
from .params import Params, reducedgravity
from .stretching import StretchingOperator, calcS, calcinvS
from .variables import Vars, updatevars
from .tendency import Equation, calcN, calcNlinear, hyperdissipation
from .diagnostics import energies, fluxes
from .problem import Problem, Clock

__all__=['Problem','Clock','Fouriert','fwdtransform','invtransform',
         'Params','reducedgravity','StretchingOperator','calcS','calcinvS',
         'Vars','updatevars','Equation','calcN','calcNlinear',
         'hyperdissipation','energies','fluxes']
