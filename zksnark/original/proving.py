import logging

from zksnark.artifacts import OriginalProof
from zksnark.errors import WitnessError
from zksnark.field import FR, ec_add, ec_mul, load_g1_list, load_g2_list, random_fr, to_g1, to_g2
from zksnark.groth16.proving import multiexp, public_signals
from zksnark.poly_utils import (
    add_polys,
    circuit_from_proving_key,
    create_divisor_polynomial,
    scale_poly,
    solution_polynomials,
    subtract_polys,
    vanishing_poly,
)

logger = logging.getLogger(__name__)


def blinded_h(vk_proof, witness, d1, d2, d3):
    """H' = (A·B - C)/Z + d2·A + d1·B + d1·d2·Z - d3."""
    cir = circuit_from_proving_key(vk_proof)
    Apoly, Bpoly, Cpoly, domain_size = solution_polynomials(cir, witness)
    Z = vanishing_poly(domain_size)
    Hx = create_divisor_polynomial(Apoly, Bpoly, Cpoly, Z)
    Hx = add_polys(Hx, scale_poly(Apoly, d2))
    Hx = add_polys(Hx, scale_poly(Bpoly, d1))
    Hx = add_polys(Hx, scale_poly(Z, d1 * d2))
    return subtract_polys(Hx, [d3])


def gen_proof(vk_proof, witness, d1=None, d2=None, d3=None):
    witness = [FR(w) for w in witness]
    d1 = random_fr() if d1 is None else FR(d1)
    d2 = random_fr() if d2 is None else FR(d2)
    d3 = random_fr() if d3 is None else FR(d3)
    n_vars = vk_proof["nVars"]
    n_public = vk_proof["nPublic"]
    private = slice(n_public + 1, n_vars)

    A, Ap = load_g1_list(vk_proof["A"]), load_g1_list(vk_proof["Ap"])
    B, Bp = load_g2_list(vk_proof["B"]), load_g1_list(vk_proof["Bp"])
    C, Cp = load_g1_list(vk_proof["C"]), load_g1_list(vk_proof["Cp"])
    Kp = load_g1_list(vk_proof["Kp"])
    hExps = load_g1_list(vk_proof["hExps"])

    Hx = blinded_h(vk_proof, witness, d1, d2, d3)
    if len(Hx) > len(hExps):
        raise WitnessError("H polynomial degree exceeds the proving key")
    logger.debug("original proof: %d wires, H degree %d", len(witness), len(Hx) - 1)

    pi_a = ec_add(multiexp(A[private], witness[private]), ec_mul(A[n_vars], d1))
    pi_ap = ec_add(multiexp(Ap[private], witness[private]), ec_mul(Ap[n_vars], d1))
    pi_b = ec_add(multiexp(B, witness), ec_mul(B[n_vars], d2))
    pi_bp = ec_add(multiexp(Bp, witness), ec_mul(Bp[n_vars], d2))
    pi_c = ec_add(multiexp(C, witness), ec_mul(C[n_vars], d3))
    pi_cp = ec_add(multiexp(Cp, witness), ec_mul(Cp[n_vars], d3))

    pi_kp = multiexp(Kp, witness)
    pi_kp = ec_add(pi_kp, ec_mul(Kp[n_vars], d1))
    pi_kp = ec_add(pi_kp, ec_mul(Kp[n_vars + 1], d2))
    pi_kp = ec_add(pi_kp, ec_mul(Kp[n_vars + 2], d3))

    pi_h = multiexp(hExps, Hx)

    proof = OriginalProof(
        pi_a=to_g1(pi_a),
        pi_ap=to_g1(pi_ap),
        pi_b=to_g2(pi_b),
        pi_bp=to_g1(pi_bp),
        pi_c=to_g1(pi_c),
        pi_cp=to_g1(pi_cp),
        pi_h=to_g1(pi_h),
        pi_kp=to_g1(pi_kp),
    )
    return proof, public_signals(vk_proof, witness)
