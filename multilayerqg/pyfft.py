import numpy as np
import pyfftw

class Fouriert(object):
    """
    wrapper class for spectral transform operations on a doubly
    periodic grid with a stack of fluid layers.

    fields on the grid have shape (nlayers, ny, nx), spectral
    coefficients have shape (nlayers, nl, nkr) with nl = ny and
    nkr = nx//2+1 (only non-negative x wavenumbers are stored).
    """
    def __init__(self,nx,Lx,ny=None,Ly=None,nlayers=1,precision='double',threads=1):
        """initialize
        nx,ny: number of grid points in each direction (must be even)
        Lx,Ly: domain size in each direction
        nlayers: number of layers in the layered transform plans
        precision: 'single' or 'double'
        threads: number of threads used by fftw"""
        if ny is None: ny = nx
        if Ly is None: Ly = Lx
        if nx%2 or ny%2:
            raise ValueError('nx and ny must be even (powers of 2 are fastest)')
        if precision == 'single':
            self.dtype = np.dtype('float32')
            self.cdtype = np.dtype('complex64')
        elif precision == 'double':
            self.dtype = np.dtype('float64')
            self.cdtype = np.dtype('complex128')
        else:
            msg = "precision must be 'single' or 'double'"
            raise ValueError(msg)
        self.nx = nx; self.ny = ny
        self.Lx = float(Lx); self.Ly = float(Ly)
        self.nlayers = nlayers
        self.threads = threads
        self.nkr = nx//2+1
        self.nl = ny
        self.dx = self.Lx/nx; self.dy = self.Ly/ny
        self.x = np.arange(0.,self.Lx,self.dx,dtype=self.dtype)[:nx]
        self.y = np.arange(0.,self.Ly,self.dy,dtype=self.dtype)[:ny]
        # set up pyfftw objects for transforms
        self.rfft2=pyfftw.builders.rfft2(pyfftw.empty_aligned((nlayers,ny,nx), dtype=self.dtype),\
                                          axes=(-2, -1), threads=threads)
        self.irfft2=pyfftw.builders.irfft2(pyfftw.empty_aligned((nlayers,ny,self.nkr), dtype=self.cdtype),\
                                          axes=(-2, -1), threads=threads)
        self.rfft2_2d=pyfftw.builders.rfft2(pyfftw.empty_aligned((ny,nx), dtype=self.dtype),\
                                          axes=(-2, -1), threads=threads)
        self.irfft2_2d=pyfftw.builders.irfft2(pyfftw.empty_aligned((ny,self.nkr), dtype=self.cdtype),\
                                          axes=(-2, -1), threads=threads)
        # spectral stuff
        dk = 2.*np.pi/self.Lx
        dl = 2.*np.pi/self.Ly
        kr =  dk*np.arange(0.,self.nkr)
        l =  dl*np.append( np.arange(0.,ny//2),np.arange(-ny//2,0.) )
        kr, l = np.meshgrid(kr, l)
        self.kr = kr.astype(self.dtype)
        self.l = l.astype(self.dtype)
        self.Krsq = self.kr**2 + self.l**2
        self.ik = (1.0j * self.kr).astype(self.cdtype)
        self.il = (1.0j * self.l).astype(self.cdtype)
        self.invKrsq = np.zeros_like(self.Krsq)
        nonzero = self.Krsq != 0.
        self.invKrsq[nonzero] = 1./self.Krsq[nonzero]

    def grdtospec(self,data):
        """compute spectral coefficients from gridded data"""
        if data.ndim==2:
            dataspec = self.rfft2_2d(data)
        elif data.ndim==3:
            self._checklayers(data)
            dataspec = self.rfft2(data)
        else:
            raise IndexError('data must be 2d or 3d')
        return np.array(dataspec,copy=True)

    def spectogrd(self,dataspec):
        """compute gridded data from spectral coefficients"""
        if dataspec.ndim==2:
            data = self.irfft2_2d(dataspec)
        elif dataspec.ndim==3:
            self._checklayers(dataspec)
            data = self.irfft2(dataspec)
        else:
            raise IndexError('dataspec must be 2d or 3d')
        return np.array(data,copy=True)

    def getgrad(self, dataspec):
        """x and y derivatives on the grid from spectral coefficients"""
        return self.spectogrd(self.ik*dataspec), self.spectogrd(self.il*dataspec)

    def parsevalsum(self, uh):
        """
        domain integral of the product whose spectral coefficients
        (or products of coefficients, e.g. abs(psih)**2) are uh.
        modes with kr > 0 stand in for their complex conjugates and are
        counted twice, except the Nyquist column (nx is even).
        """
        s = 2.*uh.sum(axis=(-2,-1)) - uh[...,0].sum(axis=-1) - uh[...,-1].sum(axis=-1)
        norm = self.Lx*self.Ly/(self.nx**2*self.ny**2)
        return norm*np.real(s)

    def parsevalsum2(self, uh):
        """domain integral of the square of the field with coefficients uh"""
        return self.parsevalsum(np.abs(uh)**2)

    def _checklayers(self, arr):
        if arr.shape[0] != self.nlayers:
            msg = 'layered array has %s layers, transform plan has %s' % (arr.shape[0], self.nlayers)
            raise ValueError(msg)

def fwdtransform(varh, var, grid):
    """forward transform var into the pre-allocated spectral array varh"""
    if var.shape != varh.shape[:-2]+(grid.ny,grid.nx):
        msg = 'grid array has shape %s, expected %s' % (var.shape, varh.shape[:-2]+(grid.ny,grid.nx))
        raise ValueError(msg)
    varh[...] = grid.grdtospec(var)

def invtransform(var, varh, grid):
    """inverse transform varh into the pre-allocated grid array var"""
    if varh.shape != var.shape[:-2]+(grid.nl,grid.nkr):
        msg = 'spectral array has shape %s, expected %s' % (varh.shape, var.shape[:-2]+(grid.nl,grid.nkr))
        raise ValueError(msg)
    var[...] = grid.spectogrd(varh)
