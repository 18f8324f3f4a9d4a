"""프로토콜 → 엔진(setup / gen_proof / is_valid) 매핑."""

from collections import namedtuple

from zksnark.artifacts import Protocol
from zksnark.errors import UnsupportedProtocol
from zksnark.groth16 import proving as groth_proving
from zksnark.groth16 import setup as groth_setup
from zksnark.groth16 import verifying as groth_verifying
from zksnark.kimleeoh import proving as kimleeoh_proving
from zksnark.kimleeoh import setup as kimleeoh_setup
from zksnark.kimleeoh import verifying as kimleeoh_verifying
from zksnark.original import proving as original_proving
from zksnark.original import setup as original_setup
from zksnark.original import verifying as original_verifying

Engine = namedtuple("Engine", ["setup", "gen_proof", "is_valid"])

ENGINES = {
    Protocol.ORIGINAL: Engine(original_setup.setup, original_proving.gen_proof,
                              original_verifying.is_valid),
    Protocol.GROTH: Engine(groth_setup.setup, groth_proving.gen_proof,
                           groth_verifying.is_valid),
    Protocol.KIMLEEOH: Engine(kimleeoh_setup.setup, kimleeoh_proving.gen_proof,
                              kimleeoh_verifying.is_valid),
}

assert set(ENGINES) == set(Protocol), "every protocol needs an engine"


def engine_for(protocol):
    protocol = Protocol.parse(protocol)
    if protocol not in ENGINES:
        raise UnsupportedProtocol(f"Invalid protocol: {protocol.value}")
    return ENGINES[protocol]
