from zksnark.field import G1, ec_add, ec_mul, ec_pairing, from_g1, from_g2
from zksnark.groth16.verifying import check_public_signals, rhs
from zksnark.kimleeoh.proving import challenges


# e(A + h1·G1, B + h2·δ) == e(α, β) · e(Σ IC_i·x_i, γ) · e(C, δ)
def is_valid(vk_verifier, proof, public_signals):
    if not check_public_signals(vk_verifier, public_signals):
        return False
    prf_A = from_g1(proof.pi_a)
    prf_B = from_g2(proof.pi_b)
    prf_C = from_g1(proof.pi_c)
    delta_2 = from_g2(vk_verifier.vk_delta_2)

    h1, h2 = challenges(proof.pi_a, proof.pi_b, public_signals)
    prf_A = ec_add(prf_A, ec_mul(G1, h1))
    prf_B = ec_add(prf_B, ec_mul(delta_2, h2))
    return ec_pairing(prf_B, prf_A) == rhs(prf_C, vk_verifier, public_signals)
