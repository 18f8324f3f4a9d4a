"""
snarkjs 명령행 도구
====================

한 번 실행에 명령 하나만 수행한다. 명령 이름은 대소문자를 구분하지 않는다.

    snarkjs info              -r circuit.r1cs
    snarkjs printconstraints  -r circuit.r1cs -s circuit.sym
    snarkjs setup             -r circuit.r1cs --pk proving_key.json --vk verification_key.json --protocol groth
    snarkjs calculatewitness  -r circuit.r1cs -s circuit.sym -i input.json --wt witness.json
    snarkjs proof             --pk proving_key.json --wt witness.json -p proof.json --pub public.json
    snarkjs verify            --vk verification_key.json -p proof.json --pub public.json
    snarkjs generateverifier  --vk verification_key.json -v verifier.sol
    snarkjs generatecall      -p proof.json --pub public.json

종료 코드: 0 = 성공, 1 = 오류 또는 검증 실패(INVALID).
"""

import argparse
import logging
import sys
import traceback

from zksnark import __version__
from zksnark.artifacts import (
    Protocol,
    proof_from_json,
    public_signals_from_json,
    verification_key_from_json,
)
from zksnark.errors import ArtifactError, InvalidCommand, InvalidProof
from zksnark.printr1cs import print_r1cs
from zksnark.protocol import engine_for
from zksnark.r1cs import load_r1cs
from zksnark.solidity import generate_call, generate_verifier
from zksnark.syms import load_syms
from zksnark.utils import load_json, save_json
from zksnark.witness import WitnessCalculator

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="snarkjs",
        description="zkSNARK artifact pipeline: setup, witness, proof, verification and Solidity export.",
    )
    parser.add_argument("command", help="info | printconstraints | setup | calculatewitness | "
                                        "proof | verify | generateverifier | generatecall")
    parser.add_argument("-r", "--r1cs", default="circuit.r1cs", help="Compiled constraint system")
    parser.add_argument("-s", "--sym", default="circuit.sym", help="Circuit debug symbols")
    parser.add_argument("--pk", "--provingkey", dest="provingkey", default="proving_key.json")
    parser.add_argument("--vk", "--verificationkey", dest="verificationkey",
                        default="verification_key.json")
    parser.add_argument("-i", "--input", default="input.json")
    parser.add_argument("--wt", "--witness", dest="witness", default="witness.json")
    parser.add_argument("-p", "--proof", default="proof.json")
    parser.add_argument("--pub", "--public", dest="public", default="public.json")
    parser.add_argument("-v", "--verifier", default="verifier.sol")
    parser.add_argument("--protocol", default=Protocol.GROTH.value,
                        help="original | groth | kimleeoh (setup only)")
    parser.add_argument("--lg", "--logget", dest="logget", action="store_true",
                        help="Print every signal read while computing the witness")
    parser.add_argument("--ls", "--logset", dest="logset", action="store_true",
                        help="Print every signal assignment while computing the witness")
    parser.add_argument("--lt", "--logtrigger", dest="logtrigger", action="store_true",
                        help="Print component start/finish while computing the witness")
    parser.add_argument("--sanitycheck", action="store_true",
                        help="Re-check every constraint after computing the witness")
    parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


# ─────────────────────────────────────────────────────────────────────
# 명령
# ─────────────────────────────────────────────────────────────────────

def cmd_info(args):
    cir = load_r1cs(args.r1cs)
    print(f"# Wires: {cir.n_vars}")
    print(f"# Constraints: {cir.n_constraints}")
    print(f"# Private Inputs: {cir.n_prv_inputs}")
    print(f"# Public Inputs: {cir.n_pub_inputs}")
    print(f"# Outputs: {cir.n_outputs}")
    return 0


def cmd_printconstraints(args):
    cir = load_r1cs(args.r1cs)
    sym = load_syms(args.sym)
    print_r1cs(cir, sym)
    return 0


def cmd_setup(args):
    cir = load_r1cs(args.r1cs)
    engine = engine_for(args.protocol)
    vk_proof, vk_verifier = engine.setup(cir)
    save_json(args.provingkey, vk_proof)
    save_json(args.verificationkey, vk_verifier.to_json())
    return 0


def cmd_calculatewitness(args):
    cir = load_r1cs(args.r1cs)
    sym = load_syms(args.sym)
    inputs = load_json(args.input)
    if not isinstance(inputs, dict):
        raise ArtifactError(f"{args.input}: input signals must be a JSON object")

    def log_set_signal(wire, value):
        print(f"SET {sym.name_of(wire)} <-- {value}")

    def log_get_signal(wire, value):
        print(f"GET {sym.name_of(wire)} --> {value}")

    def log_start_component(c_idx):
        print(f"START: {sym.component_idx_to_name.get(c_idx, c_idx)}")

    def log_finish_component(c_idx):
        print(f"FINISH: {sym.component_idx_to_name.get(c_idx, c_idx)}")

    wc = WitnessCalculator(
        cir, sym,
        sanity_check=args.sanitycheck,
        log_set_signal=log_set_signal if args.logset else None,
        log_get_signal=log_get_signal if args.logget else None,
        log_start_component=log_start_component if args.logtrigger else None,
        log_finish_component=log_finish_component if args.logtrigger else None,
    )
    save_json(args.witness, wc.calculate_witness(inputs))
    return 0


def cmd_proof(args):
    vk_proof = load_json(args.provingkey)
    if not isinstance(vk_proof, dict) or "protocol" not in vk_proof:
        raise ArtifactError(f"{args.provingkey}: proving key has no protocol")
    witness = load_json(args.witness)
    if not isinstance(witness, list):
        raise ArtifactError(f"{args.witness}: witness must be a JSON list")

    engine = engine_for(Protocol.from_tag(vk_proof["protocol"]))
    proof, public_signals = engine.gen_proof(vk_proof, witness)
    save_json(args.proof, proof.to_json())
    save_json(args.public, public_signals)
    return 0


def cmd_verify(args):
    vk_verifier = verification_key_from_json(load_json(args.verificationkey))
    proof = proof_from_json(load_json(args.proof))
    public_signals = public_signals_from_json(load_json(args.public))
    if proof.protocol is not vk_verifier.protocol:
        raise InvalidProof(f"InvalidProof: {proof.protocol.value} proof "
                           f"for a {vk_verifier.protocol.value} verification key")

    if engine_for(vk_verifier.protocol).is_valid(vk_verifier, proof, public_signals):
        print("OK")
        return 0
    print("INVALID")
    return 1


def cmd_generateverifier(args):
    vk_verifier = verification_key_from_json(load_json(args.verificationkey))
    with open(args.verifier, "w", encoding="utf-8") as f:
        f.write(generate_verifier(vk_verifier))
    return 0


def cmd_generatecall(args):
    public_signals = public_signals_from_json(load_json(args.public))
    proof = proof_from_json(load_json(args.proof))
    print(generate_call(proof, public_signals))
    return 0


COMMANDS = {
    "INFO": cmd_info,
    "PRINTCONSTRAINTS": cmd_printconstraints,
    "SETUP": cmd_setup,
    "CALCULATEWITNESS": cmd_calculatewitness,
    "PROOF": cmd_proof,
    "VERIFY": cmd_verify,
    "GENERATEVERIFIER": cmd_generateverifier,
    "GENERATECALL": cmd_generatecall,
}


def run(args):
    command = COMMANDS.get(args.command.upper())
    if command is None:
        raise InvalidCommand(f"Invalid Command: {args.command}")
    logger.debug("running %s", args.command.upper())
    return command(args)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return run(args)
    except Exception as e:
        traceback.print_exc(file=sys.stdout)
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
