"""
유한체(Finite Field) 및 bn128 타원곡선 연산
============================================

모든 프로토콜 엔진이 공유하는 대수적 도구.

**유한체 FR**:
  bn128 곡선의 스칼라 필드. 증인(witness), QAP 다항식, toxic waste 모두 FR 원소이다.

**타원곡선 점**:
  py_ecc의 bn128 점은 FQ(또는 FQ2) 좌표의 튜플이며 무한원점은 ``None`` 이다.
  산출물 타입(G1Point, G2Point)과의 변환은 ``to_g1`` / ``from_g1`` 등이 담당한다.
  무한원점은 산출물에서 (0, 0) 으로 표현된다 (이더리움 precompile 관례).

사용 예시:
    >>> P = ec_mul(G1, 5)
    >>> to_g1(P)
    G1Point(x=..., y=...)
"""

import secrets

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from zksnark.artifacts import Fq2, G1Point, G2Point, G1_INFINITY, G2_INFINITY
from zksnark.errors import ArtifactError


class FR(FQ):
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order
FIELD_MODULUS = bn128.field_modulus

G1 = bn128.G1
G2 = bn128.G2

pairing = bn128.pairing


def ec_mul(point, scalar):
    """scalar · point. 스칼라가 0이거나 점이 무한원점이면 None."""
    n = int(scalar) % CURVE_ORDER
    if point is None or n == 0:
        return None
    return bn128.multiply(point, n)


def ec_add(p1, p2):
    if p1 is None:
        return p2
    if p2 is None:
        return p1
    return bn128.add(p1, p2)


def ec_neg(point):
    if point is None:
        return None
    return bn128.neg(point)


def ec_pairing(q, p):
    """e(P, Q). q는 G2, p는 G1 (py_ecc 인자 순서)."""
    return pairing(q, p)


def random_fr():
    """0이 아닌 임의의 FR 원소 (toxic waste, 블라인딩 인자)."""
    return FR(secrets.randbelow(CURVE_ORDER - 1) + 1)


# ─────────────────────────────────────────────────────────────────────
# py_ecc 점 ↔ 산출물 점 변환
# ─────────────────────────────────────────────────────────────────────

def _check_coordinates(*coords):
    for c in coords:
        if c >= FIELD_MODULUS:
            raise ArtifactError(f"Coordinate {c} is not a base field element")


def to_g1(point):
    if point is None:
        return G1_INFINITY
    return G1Point(int(point[0]), int(point[1]))


def from_g1(p):
    if p.is_infinity:
        return None
    _check_coordinates(p.x, p.y)
    point = (FQ(p.x), FQ(p.y))
    if not bn128.is_on_curve(point, bn128.b):
        raise ArtifactError(f"G1 point is not on the curve: {p}")
    return point


def to_g2(point):
    if point is None:
        return G2_INFINITY
    x, y = point
    return G2Point(
        Fq2(int(x.coeffs[0]), int(x.coeffs[1])),
        Fq2(int(y.coeffs[0]), int(y.coeffs[1])),
    )


def from_g2(p):
    if p.is_infinity:
        return None
    _check_coordinates(p.x.c0, p.x.c1, p.y.c0, p.y.c1)
    point = (bn128.FQ2([p.x.c0, p.x.c1]), bn128.FQ2([p.y.c0, p.y.c1]))
    if not bn128.is_on_curve(point, bn128.b2):
        raise ArtifactError(f"G2 point is not on the curve: {p}")
    return point


def g1_list(points):
    return [to_g1(p).to_json() for p in points]


def g2_list(points):
    return [to_g2(p).to_json() for p in points]


def load_g1_list(data):
    return [from_g1(G1Point.from_json(p)) for p in data]


def load_g2_list(data):
    return [from_g2(G2Point.from_json(p)) for p in data]
