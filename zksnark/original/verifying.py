import logging

from zksnark.field import G2, ec_add, ec_pairing, from_g1, from_g2
from zksnark.groth16.verifying import check_public_signals, cpub

logger = logging.getLogger(__name__)


def is_valid(vk_verifier, proof, public_signals):
    if not check_public_signals(vk_verifier, public_signals):
        return False

    pi_a, pi_ap = from_g1(proof.pi_a), from_g1(proof.pi_ap)
    pi_b, pi_bp = from_g2(proof.pi_b), from_g1(proof.pi_bp)
    pi_c, pi_cp = from_g1(proof.pi_c), from_g1(proof.pi_cp)
    pi_h, pi_kp = from_g1(proof.pi_h), from_g1(proof.pi_kp)

    vk_a, vk_b = from_g2(vk_verifier.vk_a), from_g1(vk_verifier.vk_b)
    vk_c, vk_g = from_g2(vk_verifier.vk_c), from_g2(vk_verifier.vk_g)
    vk_gb_1, vk_gb_2 = from_g1(vk_verifier.vk_gb_1), from_g2(vk_verifier.vk_gb_2)
    vk_z = from_g2(vk_verifier.vk_z)

    full_pi_a = ec_add(pi_a, cpub(vk_verifier, public_signals))

    # knowledge of exponent: A, B, C
    if ec_pairing(vk_a, pi_a) != ec_pairing(G2, pi_ap):
        logger.debug("original: A knowledge check failed")
        return False
    if ec_pairing(pi_b, vk_b) != ec_pairing(G2, pi_bp):
        logger.debug("original: B knowledge check failed")
        return False
    if ec_pairing(vk_c, pi_c) != ec_pairing(G2, pi_cp):
        logger.debug("original: C knowledge check failed")
        return False

    # 같은 계수 (γβ) 로 A, B, C 가 만들어졌는지
    if ec_pairing(vk_g, pi_kp) != (ec_pairing(vk_gb_2, ec_add(full_pi_a, pi_c))
                                   * ec_pairing(pi_b, vk_gb_1)):
        logger.debug("original: same-coefficients check failed")
        return False

    # QAP 나눗셈: A·B - C = H·Z
    if ec_pairing(pi_b, full_pi_a) != ec_pairing(vk_z, pi_h) * ec_pairing(G2, pi_c):
        logger.debug("original: QAP divisibility check failed")
        return False

    return True
