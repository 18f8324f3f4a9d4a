"""
R1CS 제약 시스템 로더
======================

컴파일된 회로의 제약 시스템을 읽는다. 두 가지 형식을 지원한다.

**바이너리 (.r1cs)**::

    "r1cs" | version u32 | nSections u32
    섹션: type u32 | size u64 | 내용
      1 (header)      : n8 u32 | prime (n8 bytes) | nWires u32 | nPubOut u32
                        | nPubIn u32 | nPrvIn u32 | nLabels u64 | nConstraints u32
      2 (constraints) : 제약마다 A, B, C 선형결합
                        선형결합 = nTerms u32 | (wireId u32 | coef n8 bytes) * nTerms
      3 (wire2label)  : nWires * u64

    모든 정수는 little-endian.

**JSON**::

    {"n8": 32, "prime": "...", "nVars": 6, "nOutputs": 1, "nPubInputs": 1,
     "nPrvInputs": 1, "nLabels": 6, "constraints": [[{"2": "1"}, {...}, {...}], ...],
     "map": [0, 1, 2, ...]}

와이어 배치: 0 = 상수 1, 1..nOutputs = 출력, 그 다음 공개 입력, 그 다음 비공개 입력.
"""

import json
import logging
import struct

from zksnark.errors import ArtifactError
from zksnark.field import CURVE_ORDER

logger = logging.getLogger(__name__)

R1CS_MAGIC = b"r1cs"

SECTION_HEADER = 1
SECTION_CONSTRAINTS = 2
SECTION_WIRE2LABEL = 3


class R1CS:
    """제약 시스템.

    속성:
        prime: 필드 소수
        n8: 필드 원소 바이트 수
        n_vars: 와이어 수 (상수 와이어 포함)
        n_outputs, n_pub_inputs, n_prv_inputs: 신호 수
        n_labels: 디버그 라벨 수
        constraints: [(A, B, C), ...] — 각각 {wire: coef} 딕셔너리
        wire_to_label: 와이어 → 라벨 인덱스 (없으면 None)
    """

    def __init__(self, prime=CURVE_ORDER, n8=32, n_vars=0, n_outputs=0,
                 n_pub_inputs=0, n_prv_inputs=0, n_labels=0,
                 constraints=None, wire_to_label=None):
        self.prime = prime
        self.n8 = n8
        self.n_vars = n_vars
        self.n_outputs = n_outputs
        self.n_pub_inputs = n_pub_inputs
        self.n_prv_inputs = n_prv_inputs
        self.n_labels = n_labels
        self.constraints = constraints if constraints is not None else []
        self.wire_to_label = wire_to_label

    @property
    def n_constraints(self):
        return len(self.constraints)

    @property
    def n_public(self):
        return self.n_outputs + self.n_pub_inputs

    @property
    def input_wires(self):
        """입력 신호 와이어 범위 (공개 + 비공개)."""
        start = 1 + self.n_outputs
        return range(start, start + self.n_pub_inputs + self.n_prv_inputs)


def load_r1cs(filename):
    with open(filename, "rb") as f:
        data = f.read()
    if data[:4] == R1CS_MAGIC:
        cir = parse_r1cs_binary(data)
    else:
        try:
            cir = parse_r1cs_json(json.loads(data.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ArtifactError(f"{filename}: not a r1cs file ({e})") from e
    logger.debug("loaded %s: %d wires, %d constraints",
                 filename, cir.n_vars, cir.n_constraints)
    return cir


# ─────────────────────────────────────────────────────────────────────
# 바이너리 형식
# ─────────────────────────────────────────────────────────────────────

class _Reader:

    def __init__(self, data, pos=0, end=None):
        self.data = data
        self.pos = pos
        self.end = len(data) if end is None else end

    def take(self, n):
        if self.pos + n > self.end:
            raise ArtifactError("Unexpected end of r1cs data")
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def u32(self):
        return struct.unpack("<I", self.take(4))[0]

    def u64(self):
        return struct.unpack("<Q", self.take(8))[0]

    def bigint(self, n8):
        return int.from_bytes(self.take(n8), "little")


def _read_sections(data):
    r = _Reader(data)
    if r.take(4) != R1CS_MAGIC:
        raise ArtifactError("Invalid r1cs magic")
    version = r.u32()
    if version != 1:
        raise ArtifactError(f"Unsupported r1cs version {version}")
    sections = {}
    for _ in range(r.u32()):
        section_type = r.u32()
        size = r.u64()
        sections.setdefault(section_type, (r.pos, r.pos + size))
        r.take(size)
    return sections


def _read_lc(r, n8):
    lc = {}
    for _ in range(r.u32()):
        wire = r.u32()
        lc[wire] = r.bigint(n8)
    return lc


def parse_r1cs_binary(data):
    sections = _read_sections(data)
    if SECTION_HEADER not in sections:
        raise ArtifactError("r1cs file has no header section")

    r = _Reader(data, *sections[SECTION_HEADER])
    n8 = r.u32()
    cir = R1CS(prime=r.bigint(n8), n8=n8)
    cir.n_vars = r.u32()
    cir.n_outputs = r.u32()
    cir.n_pub_inputs = r.u32()
    cir.n_prv_inputs = r.u32()
    cir.n_labels = r.u64()
    n_constraints = r.u32()

    if SECTION_CONSTRAINTS in sections:
        r = _Reader(data, *sections[SECTION_CONSTRAINTS])
        for _ in range(n_constraints):
            cir.constraints.append((_read_lc(r, n8), _read_lc(r, n8), _read_lc(r, n8)))
    elif n_constraints:
        raise ArtifactError("r1cs file has no constraints section")

    if SECTION_WIRE2LABEL in sections:
        r = _Reader(data, *sections[SECTION_WIRE2LABEL])
        cir.wire_to_label = [r.u64() for _ in range(cir.n_vars)]
    return cir


def _write_lc(lc, n8):
    out = [struct.pack("<I", len(lc))]
    for wire in sorted(lc):
        out.append(struct.pack("<I", wire))
        out.append((lc[wire] % (1 << (8 * n8))).to_bytes(n8, "little"))
    return b"".join(out)


def dump_r1cs_binary(cir):
    """R1CS → 바이너리 (.r1cs) 바이트열."""
    n8 = cir.n8
    header = b"".join([
        struct.pack("<I", n8),
        cir.prime.to_bytes(n8, "little"),
        struct.pack("<IIII", cir.n_vars, cir.n_outputs, cir.n_pub_inputs, cir.n_prv_inputs),
        struct.pack("<Q", cir.n_labels),
        struct.pack("<I", cir.n_constraints),
    ])
    constraints = b"".join(
        _write_lc(a, n8) + _write_lc(b, n8) + _write_lc(c, n8)
        for a, b, c in cir.constraints
    )
    wire_to_label = cir.wire_to_label or list(range(cir.n_vars))
    labels = b"".join(struct.pack("<Q", label) for label in wire_to_label)

    sections = [(SECTION_HEADER, header), (SECTION_CONSTRAINTS, constraints),
                (SECTION_WIRE2LABEL, labels)]
    out = [R1CS_MAGIC, struct.pack("<II", 1, len(sections))]
    for section_type, content in sections:
        out.append(struct.pack("<IQ", section_type, len(content)))
        out.append(content)
    return b"".join(out)


# ─────────────────────────────────────────────────────────────────────
# JSON 형식
# ─────────────────────────────────────────────────────────────────────

def _json_lc(lc):
    if not isinstance(lc, dict):
        raise ArtifactError(f"Linear combination must be an object, got {lc!r}")
    return {int(wire): int(coef) for wire, coef in lc.items()}


def parse_r1cs_json(data):
    if not isinstance(data, dict):
        raise ArtifactError("r1cs JSON must be an object")
    try:
        cir = R1CS(
            prime=int(data.get("prime", CURVE_ORDER)),
            n8=int(data.get("n8", 32)),
            n_vars=int(data["nVars"]),
            n_outputs=int(data["nOutputs"]),
            n_pub_inputs=int(data["nPubInputs"]),
            n_prv_inputs=int(data["nPrvInputs"]),
        )
        cir.n_labels = int(data.get("nLabels", cir.n_vars))
        for constraint in data["constraints"]:
            a, b, c = constraint
            cir.constraints.append((_json_lc(a), _json_lc(b), _json_lc(c)))
    except KeyError as e:
        raise ArtifactError(f"r1cs JSON is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ArtifactError(f"Malformed r1cs JSON: {e}") from e
    if "map" in data:
        cir.wire_to_label = [int(label) for label in data["map"]]
    return cir


def r1cs_to_json(cir):
    return {
        "n8": cir.n8,
        "prime": cir.prime,
        "nVars": cir.n_vars,
        "nOutputs": cir.n_outputs,
        "nPubInputs": cir.n_pub_inputs,
        "nPrvInputs": cir.n_prv_inputs,
        "nLabels": cir.n_labels,
        "nConstraints": cir.n_constraints,
        "constraints": [
            [{str(w): v for w, v in lc.items()} for lc in constraint]
            for constraint in cir.constraints
        ],
        "map": cir.wire_to_label or list(range(cir.n_vars)),
    }
