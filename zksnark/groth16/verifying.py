import logging

from zksnark.field import (
    CURVE_ORDER, ec_add, ec_mul, ec_pairing, from_g1, from_g2,
)

logger = logging.getLogger(__name__)


def check_public_signals(vk_verifier, public_signals):
    if len(public_signals) != vk_verifier.n_public:
        logger.warning("expected %d public signals, got %d",
                       vk_verifier.n_public, len(public_signals))
        return False
    if any(not 0 <= int(v) < CURVE_ORDER for v in public_signals):
        logger.warning("public signal outside the scalar field")
        return False
    return True


def cpub(vk_verifier, public_signals):
    """IC[0] + Σ IC[i+1] · publicSignals[i]."""
    IC = [from_g1(p) for p in vk_verifier.IC]
    acc = IC[0]
    for point, value in zip(IC[1:], public_signals):
        acc = ec_add(acc, ec_mul(point, value))
    return acc


def lhs(prf_A, prf_B):
    return ec_pairing(prf_B, prf_A)


def rhs(prf_C, vk_verifier, public_signals):
    alfa_1 = from_g1(vk_verifier.vk_alfa_1)
    beta_2 = from_g2(vk_verifier.vk_beta_2)
    gamma_2 = from_g2(vk_verifier.vk_gamma_2)
    delta_2 = from_g2(vk_verifier.vk_delta_2)

    RHS = ec_pairing(beta_2, alfa_1)
    RHS = RHS * ec_pairing(gamma_2, cpub(vk_verifier, public_signals))
    return RHS * ec_pairing(delta_2, prf_C)


# e(A, B) == e(α, β) · e(Σ IC_i·x_i, γ) · e(C, δ)
# 곡선 밖의 점은 False 가 아니라 ArtifactError.
def is_valid(vk_verifier, proof, public_signals):
    if not check_public_signals(vk_verifier, public_signals):
        return False
    prf_A = from_g1(proof.pi_a)
    prf_B = from_g2(proof.pi_b)
    prf_C = from_g1(proof.pi_c)
    return lhs(prf_A, prf_B) == rhs(prf_C, vk_verifier, public_signals)
