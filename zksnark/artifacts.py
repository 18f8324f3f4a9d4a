"""
zk-SNARK 산출물(artifact) 타입
================================

검증 키(verification key)와 증명(proof)은 프로토콜마다 모양이 다르다.
JSON에 들어있는 문자열 ``protocol`` 필드를 매번 확인하는 대신, 읽어들이는 순간
프로토콜별 타입으로 변환하고 이후에는 그 타입만 사용한다.

**프로토콜별 레이아웃**:

  - original: vk_a, vk_b, vk_c, vk_g, vk_gb_1, vk_gb_2, vk_z, IC
              pi_a, pi_ap, pi_b, pi_bp, pi_c, pi_cp, pi_h, pi_kp
  - groth / kimleeoh (동일한 레이아웃):
              vk_alfa_1, vk_beta_2, vk_gamma_2, vk_delta_2, IC
              pi_a, pi_b, pi_c

**점(point) 표현**:
  G1 점은 ``[x, y]``, G2 점은 ``[[x.c0, x.c1], [y.c0, y.c1]]``.
  무한원점은 모든 좌표가 0인 점으로 저장한다.
  snarkjs의 사영(projective) 좌표 ``[x, y, 1]`` / ``[0, 1, 0]`` 도 읽을 수 있다.

사용 예시:
    >>> vk = verification_key_from_json(unstringify_bigints(data))
    >>> vk.protocol
    <Protocol.GROTH: 'groth'>
"""

import enum
from dataclasses import dataclass
from typing import ClassVar, List, NamedTuple, Tuple

from zksnark.errors import ArtifactError, InvalidProof, UnsupportedProtocol


class Protocol(enum.Enum):
    ORIGINAL = "original"
    GROTH = "groth"
    KIMLEEOH = "kimleeoh"

    @classmethod
    def parse(cls, token):
        """명령행 --protocol 값. 대소문자를 구분하지 않는다."""
        if isinstance(token, cls):
            return token
        try:
            return cls(str(token).lower())
        except ValueError:
            raise UnsupportedProtocol(f"Invalid protocol: {token}") from None

    @classmethod
    def from_tag(cls, tag):
        """산출물에 저장된 protocol 태그. 정확히 일치해야 한다."""
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedProtocol(f"Invalid protocol: {tag}") from None


GROTH_LAYOUT = (Protocol.GROTH, Protocol.KIMLEEOH)


def _field(value, what):
    # unstringify_bigints 를 거친 값만 받는다. float 는 잘라내지 않고 거부한다.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArtifactError(f"{what}: expected a field element, got {value!r}")
    if value < 0:
        raise ArtifactError(f"{what}: negative field element {value}")
    return value


def _pair(data, what):
    if not isinstance(data, (list, tuple)) or len(data) not in (2, 3):
        raise ArtifactError(f"{what}: expected 2 coordinates, got {data!r}")
    return list(data)


# ─────────────────────────────────────────────────────────────────────
# 점(point) 타입
# ─────────────────────────────────────────────────────────────────────

class Fq2(NamedTuple):
    """2차 확장체 원소 c0 + c1·u."""
    c0: int
    c1: int

    def to_json(self):
        return [self.c0, self.c1]

    @classmethod
    def from_json(cls, data, what="Fq2"):
        if not isinstance(data, (list, tuple)) or len(data) != 2:
            raise ArtifactError(f"{what}: expected [c0, c1], got {data!r}")
        return cls(_field(data[0], what), _field(data[1], what))


class G1Point(NamedTuple):
    x: int
    y: int

    @property
    def is_infinity(self):
        return self.x == 0 and self.y == 0

    def to_json(self):
        return [self.x, self.y]

    @classmethod
    def from_json(cls, data, what="G1 point"):
        coords = _pair(data, what)
        if len(coords) == 3:
            z = _field(coords[2], what)
            if z == 0:
                return cls(0, 0)
            if z != 1:
                raise ArtifactError(f"{what}: point is not in affine form (z={z})")
        return cls(_field(coords[0], what), _field(coords[1], what))


class G2Point(NamedTuple):
    x: Fq2
    y: Fq2

    @property
    def is_infinity(self):
        return self.x == (0, 0) and self.y == (0, 0)

    def to_json(self):
        return [self.x.to_json(), self.y.to_json()]

    @classmethod
    def from_json(cls, data, what="G2 point"):
        coords = _pair(data, what)
        if len(coords) == 3:
            z = Fq2.from_json(coords[2], what)
            if z == (0, 0):
                return cls(Fq2(0, 0), Fq2(0, 0))
            if z != (1, 0):
                raise ArtifactError(f"{what}: point is not in affine form (z={z})")
        return cls(Fq2.from_json(coords[0], what), Fq2.from_json(coords[1], what))


G1_INFINITY = G1Point(0, 0)
G2_INFINITY = G2Point(Fq2(0, 0), Fq2(0, 0))


def _require(data, key):
    if not isinstance(data, dict):
        raise ArtifactError(f"Expected a JSON object, got {type(data).__name__}")
    if key not in data:
        raise ArtifactError(f"Missing field: {key}")
    return data[key]


def _g1(data, key):
    return G1Point.from_json(_require(data, key), key)


def _g2(data, key):
    return G2Point.from_json(_require(data, key), key)


def _ic(data):
    ic = _require(data, "IC")
    if not isinstance(ic, list) or not ic:
        raise ArtifactError("IC must be a non-empty list of G1 points")
    return tuple(G1Point.from_json(p, f"IC[{i}]") for i, p in enumerate(ic))


# ─────────────────────────────────────────────────────────────────────
# 검증 키 (Verification Key)
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OriginalVerificationKey:
    """PGHR13 검증 키. IC[0]은 상수항, IC[i]는 i번째 공개 입력."""
    vk_a: G2Point
    vk_b: G1Point
    vk_c: G2Point
    vk_g: G2Point
    vk_gb_1: G1Point
    vk_gb_2: G2Point
    vk_z: G2Point
    IC: Tuple[G1Point, ...]

    protocol: ClassVar[Protocol] = Protocol.ORIGINAL

    @property
    def n_public(self):
        return len(self.IC) - 1

    def to_json(self):
        return {
            "protocol": self.protocol.value,
            "nPublic": self.n_public,
            "vk_a": self.vk_a.to_json(),
            "vk_b": self.vk_b.to_json(),
            "vk_c": self.vk_c.to_json(),
            "vk_g": self.vk_g.to_json(),
            "vk_gb_1": self.vk_gb_1.to_json(),
            "vk_gb_2": self.vk_gb_2.to_json(),
            "vk_z": self.vk_z.to_json(),
            "IC": [p.to_json() for p in self.IC],
        }

    @classmethod
    def from_json(cls, data):
        return cls(
            vk_a=_g2(data, "vk_a"),
            vk_b=_g1(data, "vk_b"),
            vk_c=_g2(data, "vk_c"),
            vk_g=_g2(data, "vk_g"),
            vk_gb_1=_g1(data, "vk_gb_1"),
            vk_gb_2=_g2(data, "vk_gb_2"),
            vk_z=_g2(data, "vk_z"),
            IC=_ic(data),
        )


@dataclass(frozen=True)
class GrothVerificationKey:
    """Groth16 / Kim-Lee-Oh 공용 검증 키."""
    protocol: Protocol
    vk_alfa_1: G1Point
    vk_beta_2: G2Point
    vk_gamma_2: G2Point
    vk_delta_2: G2Point
    IC: Tuple[G1Point, ...]

    def __post_init__(self):
        if self.protocol not in GROTH_LAYOUT:
            raise UnsupportedProtocol(
                f"{self.protocol.value} does not use the groth key layout")

    @property
    def n_public(self):
        return len(self.IC) - 1

    def to_json(self):
        return {
            "protocol": self.protocol.value,
            "nPublic": self.n_public,
            "vk_alfa_1": self.vk_alfa_1.to_json(),
            "vk_beta_2": self.vk_beta_2.to_json(),
            "vk_gamma_2": self.vk_gamma_2.to_json(),
            "vk_delta_2": self.vk_delta_2.to_json(),
            "IC": [p.to_json() for p in self.IC],
        }

    @classmethod
    def from_json(cls, data, protocol=Protocol.GROTH):
        return cls(
            protocol=protocol,
            vk_alfa_1=_g1(data, "vk_alfa_1"),
            vk_beta_2=_g2(data, "vk_beta_2"),
            vk_gamma_2=_g2(data, "vk_gamma_2"),
            vk_delta_2=_g2(data, "vk_delta_2"),
            IC=_ic(data),
        )


def verification_key_from_json(data):
    """태그(protocol)에 따라 알맞은 검증 키 타입으로 변환한다."""
    tag = _require(data, "protocol")
    protocol = Protocol.from_tag(tag)
    if protocol is Protocol.ORIGINAL:
        return OriginalVerificationKey.from_json(data)
    return GrothVerificationKey.from_json(data, protocol)


# ─────────────────────────────────────────────────────────────────────
# 증명 (Proof)
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OriginalProof:
    pi_a: G1Point
    pi_ap: G1Point
    pi_b: G2Point
    pi_bp: G1Point
    pi_c: G1Point
    pi_cp: G1Point
    pi_h: G1Point
    pi_kp: G1Point

    protocol: ClassVar[Protocol] = Protocol.ORIGINAL

    def to_json(self):
        return {
            "protocol": self.protocol.value,
            "pi_a": self.pi_a.to_json(),
            "pi_ap": self.pi_ap.to_json(),
            "pi_b": self.pi_b.to_json(),
            "pi_bp": self.pi_bp.to_json(),
            "pi_c": self.pi_c.to_json(),
            "pi_cp": self.pi_cp.to_json(),
            "pi_h": self.pi_h.to_json(),
            "pi_kp": self.pi_kp.to_json(),
        }

    @classmethod
    def from_json(cls, data):
        return cls(
            pi_a=_g1(data, "pi_a"),
            pi_ap=_g1(data, "pi_ap"),
            pi_b=_g2(data, "pi_b"),
            pi_bp=_g1(data, "pi_bp"),
            pi_c=_g1(data, "pi_c"),
            pi_cp=_g1(data, "pi_cp"),
            pi_h=_g1(data, "pi_h"),
            pi_kp=_g1(data, "pi_kp"),
        )


@dataclass(frozen=True)
class GrothProof:
    protocol: Protocol
    pi_a: G1Point
    pi_b: G2Point
    pi_c: G1Point

    def __post_init__(self):
        if self.protocol not in GROTH_LAYOUT:
            raise InvalidProof(
                f"{self.protocol.value} does not use the groth proof layout")

    def to_json(self):
        return {
            "protocol": self.protocol.value,
            "pi_a": self.pi_a.to_json(),
            "pi_b": self.pi_b.to_json(),
            "pi_c": self.pi_c.to_json(),
        }

    @classmethod
    def from_json(cls, data, protocol=Protocol.GROTH):
        return cls(
            protocol=protocol,
            pi_a=_g1(data, "pi_a"),
            pi_b=_g2(data, "pi_b"),
            pi_c=_g1(data, "pi_c"),
        )


def proof_from_json(data):
    """증명 JSON을 타입으로 변환한다. protocol 필드가 없으면 original로 본다."""
    if not isinstance(data, dict):
        raise ArtifactError(f"Expected a JSON object, got {type(data).__name__}")
    tag = data.get("protocol")
    if tag is None:
        return OriginalProof.from_json(data)
    try:
        protocol = Protocol.from_tag(tag)
    except UnsupportedProtocol:
        raise InvalidProof(f"InvalidProof: unknown protocol {tag!r}") from None
    if protocol is Protocol.ORIGINAL:
        return OriginalProof.from_json(data)
    return GrothProof.from_json(data, protocol)


def public_signals_from_json(data) -> List[int]:
    if not isinstance(data, list):
        raise ArtifactError("Public signals must be a JSON list")
    return [_field(v, f"publicSignals[{i}]") for i, v in enumerate(data)]
