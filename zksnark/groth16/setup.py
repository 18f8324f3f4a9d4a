import logging

from zksnark.artifacts import GrothVerificationKey, Protocol
from zksnark.field import FR, G1, G2, ec_mul, g1_list, g2_list, random_fr, to_g1, to_g2
from zksnark.poly_utils import wire_values_at

logger = logging.getLogger(__name__)

TOXIC_NAMES = ("alpha", "beta", "gamma", "delta", "x_val")


def make_toxic(toxic=None):
    """toxic waste (α, β, γ, δ, τ). 주어지지 않은 값은 무작위로 뽑는다."""
    toxic = dict(toxic or {})
    return {name: FR(toxic[name]) if name in toxic else random_fr() for name in TOXIC_NAMES}


def sigma11(alpha, beta, delta):
    return [ec_mul(G1, alpha), ec_mul(G1, beta), ec_mul(G1, delta)]


def sigma13(n_public, alpha, beta, gamma, Ax_val, Bx_val, Cx_val):
    """IC: 공개 와이어 i (0..n_public) 의 (β·A_i + α·B_i + C_i) / γ · G1."""
    sigma1_3 = []
    for i in range(n_public + 1):
        val = (beta*Ax_val[i] + alpha*Bx_val[i] + Cx_val[i]) / gamma
        sigma1_3.append(ec_mul(G1, val))
    return sigma1_3


def sigma14(numWires, n_public, alpha, beta, delta, Ax_val, Bx_val, Cx_val):
    """비공개 와이어의 (β·A_i + α·B_i + C_i) / δ · G1. 공개 와이어는 무한원점."""
    sigma1_4 = []
    for i in range(numWires):
        if i <= n_public:
            sigma1_4.append(None)
        else:
            val = (beta*Ax_val[i] + alpha*Bx_val[i] + Cx_val[i]) / delta
            sigma1_4.append(ec_mul(G1, val))
    return sigma1_4


def sigma15(domain_size, delta, x_val, Zx_val):
    """hExps: τ^i · Z(τ) / δ · G1  (i = 0 .. m-2)."""
    sigma1_5 = []
    for i in range(domain_size - 1):
        sigma1_5.append(ec_mul(G1, (x_val**i * Zx_val) / delta))
    return sigma1_5


def sigma21(beta, gamma, delta):
    return [ec_mul(G2, beta), ec_mul(G2, gamma), ec_mul(G2, delta)]


def wire_polys(cir):
    """와이어별 희소 다항식 (제약 인덱스 → 계수). 증명 키에 저장된다."""
    polsA = [{} for _ in range(cir.n_vars)]
    polsB = [{} for _ in range(cir.n_vars)]
    polsC = [{} for _ in range(cir.n_vars)]
    for j, (a, b, c) in enumerate(cir.constraints):
        for wire, coef in a.items():
            polsA[wire][str(j)] = coef
        for wire, coef in b.items():
            polsB[wire][str(j)] = coef
        for wire, coef in c.items():
            polsC[wire][str(j)] = coef
    return polsA, polsB, polsC


def groth_keys(cir, toxic, protocol):
    """Groth16 레이아웃의 증명 키(dict)와 검증 키, 그리고 τ 에서의 와이어 값."""
    alpha, beta, gamma, delta, x_val = (toxic[name] for name in TOXIC_NAMES)
    n_public = cir.n_public

    Ax_val, Bx_val, Cx_val, Zx_val, domain_size = wire_values_at(cir, x_val)
    logger.debug("%s setup: %d wires, %d public, domain size %d",
                 protocol.value, cir.n_vars, n_public, domain_size)

    s11 = sigma11(alpha, beta, delta)
    s13 = sigma13(n_public, alpha, beta, gamma, Ax_val, Bx_val, Cx_val)
    s14 = sigma14(cir.n_vars, n_public, alpha, beta, delta, Ax_val, Bx_val, Cx_val)
    s15 = sigma15(domain_size, delta, x_val, Zx_val)
    s21 = sigma21(beta, gamma, delta)

    polsA, polsB, polsC = wire_polys(cir)
    vk_proof = {
        "protocol": protocol.value,
        "nVars": cir.n_vars,
        "nPublic": n_public,
        "domainSize": domain_size,
        "polsA": polsA,
        "polsB": polsB,
        "polsC": polsC,
        "A": g1_list([ec_mul(G1, v) for v in Ax_val]),
        "B1": g1_list([ec_mul(G1, v) for v in Bx_val]),
        "B2": g2_list([ec_mul(G2, v) for v in Bx_val]),
        "C": g1_list(s14),
        "vk_alfa_1": to_g1(s11[0]).to_json(),
        "vk_beta_1": to_g1(s11[1]).to_json(),
        "vk_delta_1": to_g1(s11[2]).to_json(),
        "vk_beta_2": to_g2(s21[0]).to_json(),
        "vk_delta_2": to_g2(s21[2]).to_json(),
        "hExps": g1_list(s15),
    }
    vk_verifier = GrothVerificationKey(
        protocol=protocol,
        vk_alfa_1=to_g1(s11[0]),
        vk_beta_2=to_g2(s21[0]),
        vk_gamma_2=to_g2(s21[1]),
        vk_delta_2=to_g2(s21[2]),
        IC=tuple(to_g1(p) for p in s13),
    )
    return vk_proof, vk_verifier, Bx_val


def setup(cir, toxic=None):
    toxic = make_toxic(toxic)
    vk_proof, vk_verifier, _ = groth_keys(cir, toxic, Protocol.GROTH)
    return vk_proof, vk_verifier
