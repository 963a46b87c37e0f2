"""
This is where the density profile solver is implemented. The Euler-Lagrange equation

    rho_i(z) = rho_i^b exp[beta mu_i^res - beta V_i(z) + c_i^(1)(z)] (* Lagrange multiplier if moles are fixed)

is iterated in the logarithm of the density, first by damped Picard iteration and then by Anderson mixing. The
stages are configured with DFTSolver, see DFTSolver.default() for the defaults.
"""
from collections import deque
import numpy as np
from poredft.constants import Specification, PICARD_MAX_ITER, PICARD_TOL, PICARD_DAMPING, ANDERSON_MAX_ITER, \
    ANDERSON_TOL, ANDERSON_DAMPING, ANDERSON_MMAX
from poredft.exceptions import SolverError


class EquilibriumResult:

    def __init__(self, x, converged, res, i, solver, max_iter, tol):
        self.x = x
        self.converged = converged
        self.residual = res
        self.tol = tol
        self.iterations = i
        self.max_iter = max_iter
        self.solver = solver
        if converged is True:
            self.message = 'Finished with convergence.'
        else:
            self.message = f'Exited after reaching max number of iterations ({self.max_iter}).'

    def __repr__(self):
        r = 'EquilibriumResult\n'
        r += f'Solver     : {self.solver}\n'
        r += f'converged  : {self.converged}\n'
        r += f'residual   : {self.residual} / Tolerance : {self.tol}\n'
        r += f'iterations : {self.iterations} / Max iterations : {self.max_iter}\n'
        r += f'message    : {self.message}'
        return r

    def __str__(self):
        return self.__repr__()


def _component_moles(profile, density):
    functional = profile.functional
    moles = np.zeros(functional.n_components)
    moles[functional.component_index()] = profile.integrate_segments(density)
    return moles


def euler_lagrange(profile):
    """
    Build the fixpoint map of the Euler-Lagrange equation of `profile`, in terms of the flattened logarithm of the
    segment densities.

    Args:
        profile (DFTProfile) : The profile
    Returns:
        callable : x -> ln(rho_new), with x = ln(rho)
    """
    functional = profile.functional
    T = profile.temperature
    idx = functional.component_index()
    shape = profile.density.shape
    spec = profile.specification

    with np.errstate(divide='ignore'):
        ln_rho_b = np.log(profile.bulk.partial_density)
    beta_mu_res = functional.bulk_residual_chemical_potential(T, profile.bulk.partial_density) / T
    ln_prefactor = (ln_rho_b + beta_mu_res)[idx][:, None]

    def fixpoint(x):
        rho = np.exp(x.reshape(shape))
        c1 = functional.correlation(T, rho, profile.convolver)
        ln_rho = ln_prefactor - profile.external_potential + c1
        if spec.kind == Specification.TOTAL_MOLES:
            ln_rho += np.log(spec.value / np.sum(_component_moles(profile, np.exp(ln_rho))))
        elif spec.kind == Specification.MOLES:
            ln_rho += np.log(spec.value / _component_moles(profile, np.exp(ln_rho)))[idx][:, None]
        return ln_rho.ravel()

    return fixpoint


def picard(fixpoint, x0, max_iter=PICARD_MAX_ITER, tol=PICARD_TOL, damping=PICARD_DAMPING, verbose=False):
    x = np.copy(x0)
    res = np.inf
    for i in range(max_iter):
        x_next = fixpoint(x)
        if not np.all(np.isfinite(x_next)):
            raise SolverError('solve', f'Picard iteration overflowed after {i} iterations.', i, res)

        res = np.linalg.norm(x - x_next) / np.sqrt(len(x))
        if verbose:
            print(f'Picard   {i:5d} | residual : {res:.6e}')
        if res < tol:
            return EquilibriumResult(x, True, res, i, 'Picard', max_iter, tol)

        x = x * (1 - damping) + x_next * damping

    return EquilibriumResult(x, False, res, max_iter, 'Picard', max_iter, tol)


def anderson(fixpoint, x0, max_iter=ANDERSON_MAX_ITER, tol=ANDERSON_TOL, damping=ANDERSON_DAMPING,
             m_max=ANDERSON_MMAX, verbose=False):
    prev_res = deque(maxlen=m_max)
    prev_x = deque(maxlen=m_max)
    x = np.copy(x0)
    res_norm = np.inf
    for k in range(max_iter):
        x_next = fixpoint(x)
        if not np.all(np.isfinite(x_next)):
            raise SolverError('solve', f'Anderson mixing overflowed after {k} iterations.', k, res_norm)

        res = x - x_next
        res_norm = np.linalg.norm(res) / np.sqrt(len(res))
        if verbose:
            print(f'Anderson {k:5d} | residual : {res_norm:.6e}')
        if res_norm < tol:
            return EquilibriumResult(x, True, res_norm, k, 'Anderson', max_iter, tol)

        prev_res.append(res)
        prev_x.append(np.copy(x))
        m = len(prev_res)

        # Coefficients minimising the norm of the combined residual, subject to sum(alpha) = 1
        r = np.ones((m + 1, m + 1))
        r[m, m] = 0.0
        r[:-1, :-1] = np.dot(prev_res, np.transpose(prev_res))
        alpha = np.zeros(m + 1)
        alpha[m] = 1.0
        try:
            alpha = np.linalg.solve(r, alpha)
        except np.linalg.LinAlgError:
            if verbose:
                print(f'Anderson {k:5d} | singular history, restarting from a damped step')
            prev_res.clear()
            prev_x.clear()
            x = x - damping * res
            continue

        x = np.zeros_like(x)
        for i in range(m):
            x += alpha[i] * (prev_x[i] - damping * prev_res[i])

    return EquilibriumResult(x, False, res_norm, max_iter, 'Anderson', max_iter, tol)


class DFTSolver:
    """
    Sequence of solver stages. Each stage starts from where the previous stopped, and only the last stage must
    converge.

    Example:
        solver = DFTSolver().picard_iteration(tol=1e-3).anderson_mixing(tol=1e-10)
        profile.solve(solver)
    """

    def __init__(self, verbose=False):
        self.stages = []
        self.verbose = verbose

    @staticmethod
    def default(verbose=False):
        return DFTSolver(verbose).picard_iteration().anderson_mixing()

    def picard_iteration(self, max_iter=PICARD_MAX_ITER, tol=PICARD_TOL, damping=PICARD_DAMPING):
        self.stages.append((picard, {'max_iter': max_iter, 'tol': tol, 'damping': damping}))
        return self

    def anderson_mixing(self, max_iter=ANDERSON_MAX_ITER, tol=ANDERSON_TOL, damping=ANDERSON_DAMPING,
                        m_max=ANDERSON_MMAX):
        self.stages.append((anderson, {'max_iter': max_iter, 'tol': tol, 'damping': damping, 'm_max': m_max}))
        return self

    def solve(self, profile, debug=False):
        """
        Iterate the density of `profile` to equilibrium. The density is only updated if the last stage converges.

        Args:
            profile (DFTProfile) : The profile
            debug (bool) : Print the residual of every iteration
        Returns:
            EquilibriumResult : Result of the last stage, with iterations counted over all stages
        Raises:
            SolverError : On overflow, or if the last stage does not converge
        """
        stages = self.stages if len(self.stages) > 0 else DFTSolver.default().stages
        verbose = self.verbose or debug
        fixpoint = euler_lagrange(profile)
        x = np.log(np.maximum(profile.density, np.finfo(float).tiny)).ravel()

        iterations = 0
        for stage, kwargs in stages:
            sol = stage(fixpoint, x, verbose=verbose, **kwargs)
            iterations += sol.iterations
            x = sol.x
            if verbose:
                print(sol)

        if not sol.converged:
            raise SolverError('solve', f'{sol.solver} did not converge in {sol.max_iter} iterations '
                                       f'(residual {sol.residual:.3e}, tolerance {sol.tol}).', iterations, sol.residual)
        profile.density = np.exp(x).reshape(profile.density.shape)
        sol.iterations = iterations
        return sol

    def __repr__(self):
        return 'DFTSolver(' + ', '.join(f'{stage.__name__}({kwargs})' for stage, kwargs in self.stages) + ')'
