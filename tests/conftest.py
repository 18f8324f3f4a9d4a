import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zksnark.groth16 import proving as groth_proving
from zksnark.groth16 import setup as groth_setup
from zksnark.kimleeoh import proving as kimleeoh_proving
from zksnark.kimleeoh import setup as kimleeoh_setup
from zksnark.original import proving as original_proving
from zksnark.original import setup as original_setup
from zksnark.r1cs import R1CS
from zksnark.syms import parse_syms


# ── 테스트 회로: out = x^3 + x + k ──
#   wire 0: one, 1: main.out, 2: main.k (공개 입력), 3: main.x (비공개 입력)
#   wire 4: main.cube.sq = x*x, 5: main.cube.out = sq*x
CONSTRAINTS = [
    ({3: 1}, {3: 1}, {4: 1}),
    ({4: 1}, {3: 1}, {5: 1}),
    ({5: 1, 3: 1, 2: 1}, {0: 1}, {1: 1}),
]

SYM_TEXT = """1,1,0,main.out
2,2,0,main.k
3,3,0,main.x
4,4,1,main.cube.sq
5,5,1,main.cube.out
"""

TEST_INPUT = {"x": 3, "k": 5}
EXPECTED_WITNESS = [1, 35, 5, 3, 9, 27]
EXPECTED_PUBLIC = [35, 5]

GROTH_TOXIC = {"alpha": 3926, "beta": 3604, "gamma": 2971, "delta": 1357, "x_val": 3721}
ORIGINAL_TOXIC = {"ra": 1021, "rb": 2039, "ka": 3037, "kb": 4057, "kc": 5059,
                  "kbeta": 6067, "kgamma": 7069, "x_val": 3721}

PROVER_R = 4106
PROVER_S = 4565


def make_circuit():
    return R1CS(n_vars=6, n_outputs=1, n_pub_inputs=1, n_prv_inputs=1, n_labels=6,
                constraints=[tuple(dict(lc) for lc in c) for c in CONSTRAINTS])


@pytest.fixture
def circuit():
    return make_circuit()


@pytest.fixture
def sym():
    return parse_syms(SYM_TEXT)


@pytest.fixture(scope="session")
def groth_keys():
    """(proving key dict, GrothVerificationKey)"""
    return groth_setup.setup(make_circuit(), GROTH_TOXIC)


@pytest.fixture(scope="session")
def groth_proof(groth_keys):
    vk_proof, _ = groth_keys
    return groth_proving.gen_proof(vk_proof, EXPECTED_WITNESS, PROVER_R, PROVER_S)


@pytest.fixture(scope="session")
def kimleeoh_keys():
    return kimleeoh_setup.setup(make_circuit(), GROTH_TOXIC)


@pytest.fixture(scope="session")
def kimleeoh_proof(kimleeoh_keys):
    vk_proof, _ = kimleeoh_keys
    return kimleeoh_proving.gen_proof(vk_proof, EXPECTED_WITNESS, PROVER_R, PROVER_S)


@pytest.fixture(scope="session")
def original_keys():
    return original_setup.setup(make_circuit(), ORIGINAL_TOXIC)


@pytest.fixture(scope="session")
def original_proof(original_keys):
    vk_proof, _ = original_keys
    return original_proving.gen_proof(vk_proof, EXPECTED_WITNESS, 11, 13, 17)
