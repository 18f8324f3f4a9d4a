"""
온체인 검증기(Solidity) 코드 생성과 호출 인자 인코딩
====================================================

**p256**:
  필드 원소를 따옴표로 감싼 ``"0x" + 64자리 16진수`` 리터럴로 바꾼다.
  EVM 의 uint256 폭을 넘는 값은 FieldElementOverflow.

**G2 좌표 순서**:
  이더리움 pairing precompile 은 Fq2 원소를 (c1, c0) 순서로 받는다.
  그래서 G2 점은 항상 ``[x.c1, x.c0], [y.c1, y.c0]`` 로 내보낸다.

**템플릿**:
  ``templates/verifier_<name>.sol`` 의 ``<%name%>`` 자리표시자를 한 번에 치환한다.
  groth 와 kimleeoh 는 같은 템플릿을 쓴다.

사용 예시:
    >>> p256(1)
    '"0x0000000000000000000000000000000000000000000000000000000000000001"'
    >>> generate_call(proof, [35, 5])
    '[...],[[...],[...]],[...],["0x...23","0x...05"]'
"""

import logging
import operator
import os
import re

from zksnark.artifacts import OriginalProof, Protocol
from zksnark.errors import (
    FieldElementOverflow, InvalidProof, TemplateError, TemplateNotFound, UnsupportedProtocol,
)

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

_PLACEHOLDER = re.compile(r"<%(\w+)%>")

IC_INDENT = " " * 8


def p256(n):
    n = operator.index(n)
    if n < 0 or n >= 1 << 256:
        raise FieldElementOverflow(f"{n} does not fit in 256 bits")
    return f'"0x{n:064x}"'


# ─────────────────────────────────────────────────────────────────────
# 점 리터럴
# ─────────────────────────────────────────────────────────────────────

def g1_decimal(p):
    return f"{p.x},{p.y}"


def g2_decimal(p):
    return f"[{p.x.c1},{p.x.c0}], [{p.y.c1},{p.y.c0}]"


def g1_call(p):
    return f"[{p256(p.x)},{p256(p.y)}]"


def g2_call(p):
    return f"[[{p256(p.x.c1)},{p256(p.x.c0)}],[{p256(p.y.c1)},{p256(p.y.c0)}]]"


# ─────────────────────────────────────────────────────────────────────
# 검증기 템플릿
# ─────────────────────────────────────────────────────────────────────

# 프로토콜 → (템플릿, G1 자리표시자 → 키 필드, G2 자리표시자 → 키 필드)
VERIFIER_LAYOUT = {
    Protocol.ORIGINAL: (
        "verifier_original.sol",
        {"vk_b": "vk_b", "vk_gb1": "vk_gb_1"},
        {"vk_a": "vk_a", "vk_c": "vk_c", "vk_g": "vk_g",
         "vk_gb2": "vk_gb_2", "vk_z": "vk_z"},
    ),
    Protocol.GROTH: (
        "verifier_groth.sol",
        {"vk_alfa1": "vk_alfa_1"},
        {"vk_beta2": "vk_beta_2", "vk_gamma2": "vk_gamma_2", "vk_delta2": "vk_delta_2"},
    ),
}
VERIFIER_LAYOUT[Protocol.KIMLEEOH] = VERIFIER_LAYOUT[Protocol.GROTH]

assert set(VERIFIER_LAYOUT) == set(Protocol), "every protocol needs a verifier template"


def load_template(name, template_dir=None):
    path = os.path.join(template_dir or TEMPLATE_DIR, name)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        raise TemplateNotFound(f"Verifier template not found: {path}") from None


def render_template(template, values):
    """``<%name%>`` 을 values[name] 으로 치환한다.

    템플릿의 자리표시자 집합과 values 의 키 집합이 정확히 같아야 한다.
    치환된 값은 다시 검사하지 않는다 (단일 패스).
    """
    found = set(_PLACEHOLDER.findall(template))
    unresolved = found - set(values)
    if unresolved:
        raise TemplateError(f"Unresolved placeholders: {', '.join(sorted(unresolved))}")
    unused = set(values) - found
    if unused:
        raise TemplateError(f"Template has no placeholders for: {', '.join(sorted(unused))}")
    return _PLACEHOLDER.sub(lambda m: str(values[m.group(1)]), template)


def ic_points(IC):
    lines = [f"vk.IC[{i}] = Pairing.G1Point({g1_decimal(p)});\n" for i, p in enumerate(IC)]
    return IC_INDENT.join(lines)


def verifier_values(vk):
    if vk.protocol not in VERIFIER_LAYOUT:
        raise UnsupportedProtocol(f"Invalid protocol: {vk.protocol}")
    _, g1_fields, g2_fields = VERIFIER_LAYOUT[vk.protocol]

    values = {}
    for placeholder, field in g1_fields.items():
        values[placeholder] = g1_decimal(getattr(vk, field))
    for placeholder, field in g2_fields.items():
        values[placeholder] = g2_decimal(getattr(vk, field))
    values["vk_input_length"] = len(vk.IC) - 1
    values["vk_ic_length"] = len(vk.IC)
    values["vk_ic_pts"] = ic_points(vk.IC)
    return values


def generate_verifier(vk, template_dir=None):
    values = verifier_values(vk)
    template_name = VERIFIER_LAYOUT[vk.protocol][0]
    logger.debug("rendering %s for %s (%d IC points)",
                 template_name, vk.protocol.value, len(vk.IC))
    return render_template(load_template(template_name, template_dir), values)


# ─────────────────────────────────────────────────────────────────────
# 호출 인자 (generatecall)
# ─────────────────────────────────────────────────────────────────────

def generate_call(proof, public_signals):
    inputs = "[" + ",".join(p256(v) for v in public_signals) + "]"
    if isinstance(proof, OriginalProof):
        groups = [
            g1_call(proof.pi_a),
            g1_call(proof.pi_ap),
            g2_call(proof.pi_b),
            g1_call(proof.pi_bp),
            g1_call(proof.pi_c),
            g1_call(proof.pi_cp),
            g1_call(proof.pi_h),
            g1_call(proof.pi_kp),
        ]
    elif proof.protocol in (Protocol.GROTH, Protocol.KIMLEEOH):
        groups = [g1_call(proof.pi_a), g2_call(proof.pi_b), g1_call(proof.pi_c)]
    else:
        raise InvalidProof(f"InvalidProof: {proof.protocol}")
    return ",".join(groups + [inputs])
