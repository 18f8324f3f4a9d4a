import hashlib
import logging

from zksnark.artifacts import G1Point, GrothProof, Protocol
from zksnark.field import (
    CURVE_ORDER, FR, G1, ec_add, ec_mul, from_g1, load_g1_list, random_fr, to_g1, to_g2,
)
from zksnark.groth16.proving import groth_proof, multiexp, public_signals

logger = logging.getLogger(__name__)


def challenges(pi_a, pi_b, publics):
    """h1 = sha256(A ‖ B ‖ publicSignals), h2 = sha256(h1). 모두 FR 로 축소."""
    coords = [pi_a.x, pi_a.y, pi_b.x.c0, pi_b.x.c1, pi_b.y.c0, pi_b.y.c1]
    coords += [int(v) for v in publics]
    h1 = hashlib.sha256(b"".join(c.to_bytes(32, "big") for c in coords)).digest()
    h2 = hashlib.sha256(h1).digest()
    return (FR(int.from_bytes(h1, "big") % CURVE_ORDER),
            FR(int.from_bytes(h2, "big") % CURVE_ORDER))


def b_over_delta(vk_proof, witness, s):
    """(b / δ) · G1 = (β/δ)·G1 + Σ w_i·(B_i(τ)/δ)·G1 + s·G1."""
    beta_delta_1 = from_g1(G1Point.from_json(vk_proof["vk_beta_delta_1"]))
    acc = ec_add(beta_delta_1, multiexp(load_g1_list(vk_proof["Bd1"]), witness))
    return ec_add(acc, ec_mul(G1, s))


def gen_proof(vk_proof, witness, r=None, s=None):
    witness = [FR(w) for w in witness]
    r = random_fr() if r is None else FR(r)
    s = random_fr() if s is None else FR(s)

    prf_A, prf_B, _, prf_C = groth_proof(vk_proof, witness, r, s)
    publics = public_signals(vk_proof, witness)
    pi_a, pi_b = to_g1(prf_A), to_g2(prf_B)
    h1, h2 = challenges(pi_a, pi_b, publics)
    logger.debug("kimleeoh challenges computed")

    prf_C = ec_add(prf_C, ec_mul(prf_A, h2))
    prf_C = ec_add(prf_C, ec_mul(b_over_delta(vk_proof, witness, s), h1))
    prf_C = ec_add(prf_C, ec_mul(G1, h1 * h2))

    proof = GrothProof(protocol=Protocol.KIMLEEOH, pi_a=pi_a, pi_b=pi_b, pi_c=to_g1(prf_C))
    return proof, publics
