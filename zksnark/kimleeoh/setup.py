"""
Kim-Lee-Oh 키 생성
===================

Groth16 과 같은 키 레이아웃을 쓰고, 증명 키에 두 가지를 더한다.

    vk_beta_delta_1 : (β / δ) · G1
    Bd1             : (B_i(τ) / δ) · G1   (와이어별)

prover 는 이 값들로 (b / δ)·G1 을 만들어, 해시 챌린지 h1 에 의한 항
e(h1·G1, B) 를 δ 기준 페어링 e(h1·(b/δ)·G1, δ) 로 옮긴다.
"""

import logging

from zksnark.artifacts import Protocol
from zksnark.field import G1, ec_mul, g1_list, to_g1
from zksnark.groth16.setup import groth_keys, make_toxic

logger = logging.getLogger(__name__)


def setup(cir, toxic=None):
    toxic = make_toxic(toxic)
    beta, delta = toxic["beta"], toxic["delta"]
    vk_proof, vk_verifier, Bx_val = groth_keys(cir, toxic, Protocol.KIMLEEOH)

    vk_proof["vk_beta_delta_1"] = to_g1(ec_mul(G1, beta / delta)).to_json()
    vk_proof["Bd1"] = g1_list([ec_mul(G1, v / delta) for v in Bx_val])
    return vk_proof, vk_verifier
