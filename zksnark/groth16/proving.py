import logging

from zksnark.artifacts import G1Point, G2Point, GrothProof, Protocol
from zksnark.errors import WitnessError
from zksnark.field import (
    FR, ec_add, ec_mul, ec_neg, from_g1, from_g2, load_g1_list, load_g2_list,
    random_fr, to_g1, to_g2,
)
from zksnark.poly_utils import (
    circuit_from_proving_key,
    create_divisor_polynomial,
    solution_polynomials,
    vanishing_poly,
)

logger = logging.getLogger(__name__)


def calculate_h(vk_proof, witness):
    cir = circuit_from_proving_key(vk_proof)
    Apoly, Bpoly, Cpoly, domain_size = solution_polynomials(cir, witness)
    return create_divisor_polynomial(Apoly, Bpoly, Cpoly, vanishing_poly(domain_size))


def multiexp(points, scalars):
    acc = None
    for point, k in zip(points, scalars):
        acc = ec_add(acc, ec_mul(point, k))
    return acc


def proof_a(vk_proof, witness, r):
    alfa_1 = from_g1(G1Point.from_json(vk_proof["vk_alfa_1"]))
    delta_1 = from_g1(G1Point.from_json(vk_proof["vk_delta_1"]))
    prf_A = ec_add(alfa_1, multiexp(load_g1_list(vk_proof["A"]), witness))
    return ec_add(prf_A, ec_mul(delta_1, r))


def proof_b(vk_proof, witness, s):
    beta_2 = from_g2(G2Point.from_json(vk_proof["vk_beta_2"]))
    delta_2 = from_g2(G2Point.from_json(vk_proof["vk_delta_2"]))
    prf_B = ec_add(beta_2, multiexp(load_g2_list(vk_proof["B2"]), witness))
    return ec_add(prf_B, ec_mul(delta_2, s))


def proof_b1(vk_proof, witness, s):
    """G1 위의 B — proof_c 계산에만 쓰인다."""
    beta_1 = from_g1(G1Point.from_json(vk_proof["vk_beta_1"]))
    delta_1 = from_g1(G1Point.from_json(vk_proof["vk_delta_1"]))
    prf_B1 = ec_add(beta_1, multiexp(load_g1_list(vk_proof["B1"]), witness))
    return ec_add(prf_B1, ec_mul(delta_1, s))


def proof_c(vk_proof, witness, Hx, prf_A, prf_B1, r, s):
    n_public = vk_proof["nPublic"]
    delta_1 = from_g1(G1Point.from_json(vk_proof["vk_delta_1"]))
    hExps = load_g1_list(vk_proof["hExps"])
    if len(Hx) > len(hExps):
        raise WitnessError("H polynomial degree exceeds the proving key")

    C = load_g1_list(vk_proof["C"])
    prf_C = multiexp(C[n_public + 1:], witness[n_public + 1:])
    prf_C = ec_add(prf_C, multiexp(hExps, Hx))
    prf_C = ec_add(prf_C, ec_mul(prf_A, s))
    prf_C = ec_add(prf_C, ec_mul(prf_B1, r))
    return ec_add(prf_C, ec_neg(ec_mul(delta_1, r * s)))


def groth_proof(vk_proof, witness, r=None, s=None):
    """(A, B, B1, C) — py_ecc 점 그대로. kimleeoh prover 가 이어서 사용한다."""
    witness = [FR(w) for w in witness]
    r = random_fr() if r is None else FR(r)
    s = random_fr() if s is None else FR(s)

    Hx = calculate_h(vk_proof, witness)
    logger.debug("proof: %d wires, H degree %d", len(witness), len(Hx) - 1)

    prf_A = proof_a(vk_proof, witness, r)
    prf_B = proof_b(vk_proof, witness, s)
    prf_B1 = proof_b1(vk_proof, witness, s)
    prf_C = proof_c(vk_proof, witness, Hx, prf_A, prf_B1, r, s)
    return prf_A, prf_B, prf_B1, prf_C


def public_signals(vk_proof, witness):
    return [int(w) for w in witness[1:vk_proof["nPublic"] + 1]]


def gen_proof(vk_proof, witness, r=None, s=None):
    prf_A, prf_B, _, prf_C = groth_proof(vk_proof, witness, r, s)
    proof = GrothProof(
        protocol=Protocol.GROTH,
        pi_a=to_g1(prf_A),
        pi_b=to_g2(prf_B),
        pi_c=to_g1(prf_C),
    )
    return proof, public_signals(vk_proof, witness)
