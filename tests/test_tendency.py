import numpy as np
import pytest

from multilayerqg import Problem, hyperdissipation


def test_background_state_only_advects_mean_pv():
    x, y = np.meshgrid(np.arange(16) * np.pi / 8, np.arange(16) * np.pi / 8)
    prob = Problem(nx=16, nlayers=2, U=[1.0, 0.5], beta=2.0, mu=0.3,
                   eta=np.cos(x) * np.sin(y))
    N = prob.gettend()
    expected = -prob.grid.grdtospec(prob.params.U * prob.params.Qx)
    np.testing.assert_allclose(N, expected, atol=1e-12)
    # no topography: nothing left at all
    prob = Problem(nx=16, nlayers=2, U=[1.0, 0.5], beta=2.0, mu=0.3)
    np.testing.assert_allclose(prob.gettend(), 0.0, atol=1e-12)


@pytest.mark.parametrize("nlayers", [1, 3])
def test_bottom_drag(rs, nlayers):
    H = np.ones(nlayers)
    rho = np.arange(1.0, nlayers + 1.0)
    prob = Problem(nx=16, nlayers=nlayers, H=H, rho=rho, mu=0.25, linear=True)
    prob.set_psi(rs.normal(size=(nlayers, 16, 16)))
    N = prob.gettend()
    psih = np.empty_like(prob.sol)
    prob.params.stretching.streamfunctionfrompv(psih, prob.sol)
    np.testing.assert_allclose(N[-1], 0.25 * prob.grid.Krsq * psih[-1], rtol=1e-12, atol=1e-14)
    np.testing.assert_allclose(N[:-1], 0.0, atol=1e-14)


def test_input_state_not_modified(rs):
    prob = Problem(nx=16, nlayers=2, U=[1.0, 0.0], beta=1.0, mu=0.1)
    prob.set_q(rs.normal(size=(2, 16, 16)))
    sol = prob.sol.copy()
    prob.gettend()
    np.testing.assert_array_equal(prob.sol, sol)


def test_steady_euler_flow():
    # psi = sin(x)sin(y) is a Laplacian eigenfunction, so J(psi,q) = 0.
    prob = Problem(nx=32, nlayers=1)
    x, y = np.meshgrid(prob.grid.x, prob.grid.y)
    prob.set_psi((np.sin(x) * np.sin(y))[np.newaxis])
    np.testing.assert_allclose(prob.gettend(), 0.0, atol=1e-10)


@pytest.mark.parametrize("linear", [False, True])
def test_rossby_wave(linear):
    # for psi = cos(kx) the only tendency is -beta*v.
    beta = 3.0
    prob = Problem(nx=32, nlayers=1, beta=beta, linear=linear)
    x, y = np.meshgrid(prob.grid.x, prob.grid.y)
    prob.set_psi(np.cos(2 * x)[np.newaxis])
    N = prob.gettend()
    np.testing.assert_allclose(N, -beta * prob.grid.ik * prob.vars.psih, atol=1e-9)


def test_linear_and_nonlinear_differ_by_eddy_flux(rs):
    kwargs = dict(nx=16, nlayers=2, U=[1.0, 0.0], beta=1.0)
    prob = Problem(**kwargs)
    plin = Problem(linear=True, **kwargs)
    q = rs.normal(size=(2, 16, 16))
    prob.set_q(q)
    plin.set_q(q)
    N = prob.gettend()
    Nlin = plin.gettend()
    grid = prob.grid
    prob.updatevars()
    v = prob.vars
    uq = grid.grdtospec(v.u * v.q)
    vq = grid.grdtospec(v.v * v.q)
    np.testing.assert_allclose(N - Nlin, -grid.ik * uq - grid.il * vq, atol=1e-10)


def test_forcing_added(rs):
    calls = []

    def calcFq(Fqh, sol, t, clock, vars, params, grid):
        calls.append((t, clock.step))
        Fqh[...] = 0.0
        Fqh[0, 1, 2] = 1.0 + 2.0j

    kwargs = dict(nx=16, nlayers=2, U=[1.0, 0.0], beta=1.0)
    forced = Problem(calcFq=calcFq, **kwargs)
    unforced = Problem(**kwargs)
    assert forced.vars.Fqh is not None and unforced.vars.Fqh is None
    q = rs.normal(size=(2, 16, 16))
    forced.set_q(q)
    unforced.set_q(q)
    diff = forced.gettend(t=0.5) - unforced.gettend(t=0.5)
    expected = np.zeros_like(diff)
    expected[0, 1, 2] = 1.0 + 2.0j
    np.testing.assert_allclose(diff, expected, atol=1e-12)
    assert calls == [(0.5, 0)]


def test_forcing_errors_propagate():
    def calcFq(Fqh, sol, t, clock, vars, params, grid):
        raise RuntimeError("bad forcing")

    prob = Problem(nx=8, nlayers=1, calcFq=calcFq)
    with pytest.raises(RuntimeError, match="bad forcing"):
        prob.gettend()


def test_hyperdissipation():
    prob = Problem(nx=8, nlayers=2, nu=0.1, nnu=2)
    L = hyperdissipation(prob.params, prob.grid)
    assert L.shape == (2, prob.grid.nl, prob.grid.nkr)
    np.testing.assert_allclose(L[1], -0.1 * prob.grid.Krsq ** 2)
    assert np.all(L[:, 0, 0] == 0.0)
    np.testing.assert_allclose(prob.eqn.L, L)
