import logging

from zksnark.artifacts import OriginalVerificationKey
from zksnark.field import FR, G1, G2, ec_mul, g1_list, g2_list, random_fr, to_g1, to_g2
from zksnark.groth16.setup import wire_polys
from zksnark.poly_utils import wire_values_at

logger = logging.getLogger(__name__)

TOXIC_NAMES = ("ra", "rb", "ka", "kb", "kc", "kbeta", "kgamma", "x_val")


def make_toxic(toxic=None):
    toxic = dict(toxic or {})
    return {name: FR(toxic[name]) if name in toxic else random_fr() for name in TOXIC_NAMES}


def setup(cir, toxic=None):
    """PGHR13 (Pinocchio) 키 생성.

    마지막 원소(인덱스 nVars)는 Z(τ) 배수로, prover 가 블라인딩에 사용한다.
    Kp 에는 A, B, C 각각의 블라인딩용 원소 3개가 붙는다.
    """
    toxic = make_toxic(toxic)
    ra, rb, ka, kb, kc, kbeta, kgamma, x_val = (toxic[name] for name in TOXIC_NAMES)
    rc = ra * rb
    n_public = cir.n_public

    Ax_val, Bx_val, Cx_val, Zx_val, domain_size = wire_values_at(cir, x_val)
    logger.debug("original setup: %d wires, %d public, domain size %d",
                 cir.n_vars, n_public, domain_size)

    a_vals = [ra * v for v in Ax_val] + [ra * Zx_val]
    b_vals = [rb * v for v in Bx_val] + [rb * Zx_val]
    c_vals = [rc * v for v in Cx_val] + [rc * Zx_val]
    k_vals = [kbeta * (a + b + c) for a, b, c in zip(a_vals[:-1], b_vals[:-1], c_vals[:-1])]
    k_vals += [kbeta * a_vals[-1], kbeta * b_vals[-1], kbeta * c_vals[-1]]

    A = [ec_mul(G1, v) for v in a_vals]
    polsA, polsB, polsC = wire_polys(cir)
    vk_proof = {
        "protocol": "original",
        "nVars": cir.n_vars,
        "nPublic": n_public,
        "domainSize": domain_size,
        "polsA": polsA,
        "polsB": polsB,
        "polsC": polsC,
        "A": g1_list(A),
        "Ap": g1_list([ec_mul(G1, ka * v) for v in a_vals]),
        "B": g2_list([ec_mul(G2, v) for v in b_vals]),
        "Bp": g1_list([ec_mul(G1, kb * v) for v in b_vals]),
        "C": g1_list([ec_mul(G1, v) for v in c_vals]),
        "Cp": g1_list([ec_mul(G1, kc * v) for v in c_vals]),
        "Kp": g1_list([ec_mul(G1, v) for v in k_vals]),
        "hExps": g1_list([ec_mul(G1, x_val**i) for i in range(domain_size + 1)]),
    }

    vk_verifier = OriginalVerificationKey(
        vk_a=to_g2(ec_mul(G2, ka)),
        vk_b=to_g1(ec_mul(G1, kb)),
        vk_c=to_g2(ec_mul(G2, kc)),
        vk_g=to_g2(ec_mul(G2, kgamma)),
        vk_gb_1=to_g1(ec_mul(G1, kbeta * kgamma)),
        vk_gb_2=to_g2(ec_mul(G2, kbeta * kgamma)),
        vk_z=to_g2(ec_mul(G2, rc * Zx_val)),
        IC=tuple(to_g1(p) for p in A[:n_public + 1]),
    )
    return vk_proof, vk_verifier
