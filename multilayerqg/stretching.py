import numpy as np

def couplingmatrix(Fp, Fm):
    """
    tridiagonal matrix F coupling each layer to its neighbors above and
    below. Fp (superdiagonal) and Fm (subdiagonal) have one entry per
    interface.
    """
    Fp = np.asarray(Fp); Fm = np.asarray(Fm)
    nlayers = len(Fp)+1
    F = np.zeros((nlayers,nlayers),np.float64)
    if nlayers == 1:
        return F
    F += np.diag(Fp,1) + np.diag(Fm,-1)
    F -= np.diag(np.append(Fp,0.) + np.append(0.,Fm))
    return F

def calcS(S, Fp, Fm, grid):
    """
    fill S (shape (nl,nkr,nlayers,nlayers)) with the stretching matrix
    at each wavenumber, so that qh = S*psih: S = -K**2 I + F.
    """
    F = couplingmatrix(Fp, Fm)
    eye = np.eye(F.shape[0])
    S[...] = -grid.Krsq[...,np.newaxis,np.newaxis]*eye + F

def calcinvS(invS, Fp, Fm, grid):
    """
    fill invS with the inverse of the stretching matrix at each
    wavenumber, so that psih = invS*qh.
    S is singular for K=0, so K**2=1 is used there and the mean (K=0)
    component of pv is then set to have no streamfunction.
    """
    F = couplingmatrix(Fp, Fm)
    eye = np.eye(F.shape[0])
    Krsq = np.where(grid.Krsq == 0., 1., grid.Krsq)
    invS[...] = np.linalg.inv(-Krsq[...,np.newaxis,np.newaxis]*eye + F)
    invS[0,0] = 0.

class StretchingOperator(object):
    """
    maps between pv and streamfunction in spectral space, coupling the
    layers through the stratification.

    with a single layer the relation is the barotropic one,
    qh = -K**2*psih, and no matrices are built.
    """
    def __init__(self, nlayers, Fp, Fm, grid):
        self.nlayers = nlayers
        self.grid = grid
        if nlayers == 1:
            self.S = None
            self.invS = None
        else:
            shape = (grid.nl, grid.nkr, nlayers, nlayers)
            self.S = np.empty(shape, grid.dtype)
            calcS(self.S, Fp, Fm, grid)
            self.invS = np.empty(shape, grid.dtype)
            calcinvS(self.invS, Fp, Fm, grid)

    def pvfromstreamfunction(self, qh, psih):
        """qh = S*psih at every wavenumber (qh may be psih)"""
        if self.nlayers == 1:
            qh[...] = -self.grid.Krsq*psih
        else:
            qh[...] = np.einsum('lkmn,nlk->mlk', self.S, psih)

    def streamfunctionfrompv(self, psih, qh):
        """psih = invS*qh at every wavenumber (psih may be qh)"""
        if self.nlayers == 1:
            psih[...] = -self.grid.invKrsq*qh
        else:
            psih[...] = np.einsum('lkmn,nlk->mlk', self.invS, qh)
