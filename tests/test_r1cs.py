import json
import struct

import pytest

from zksnark.errors import ArtifactError
from zksnark.field import CURVE_ORDER
from zksnark.r1cs import dump_r1cs_binary, load_r1cs, parse_r1cs_binary, parse_r1cs_json, r1cs_to_json
from zksnark.utils import save_json


class TestBinary:

    def test_load(self, circuit, tmp_path):
        path = tmp_path / "circuit.r1cs"
        path.write_bytes(dump_r1cs_binary(circuit))
        cir = load_r1cs(str(path))
        assert cir.prime == CURVE_ORDER
        assert cir.n_vars == 6
        assert (cir.n_outputs, cir.n_pub_inputs, cir.n_prv_inputs) == (1, 1, 1)
        assert cir.n_public == 2
        assert cir.constraints == circuit.constraints
        assert cir.wire_to_label == list(range(6))

    def test_header_layout(self, circuit):
        data = dump_r1cs_binary(circuit)
        assert data[:4] == b"r1cs"
        version, n_sections = struct.unpack("<II", data[4:12])
        assert (version, n_sections) == (1, 3)

    def test_negative_coefficient(self, circuit):
        circuit.constraints[2][2][1] = CURVE_ORDER - 1
        cir = parse_r1cs_binary(dump_r1cs_binary(circuit))
        assert cir.constraints[2][2][1] == CURVE_ORDER - 1

    def test_truncated(self, circuit):
        data = dump_r1cs_binary(circuit)
        with pytest.raises(ArtifactError):
            parse_r1cs_binary(data[:40])

    def test_bad_version(self, circuit):
        data = bytearray(dump_r1cs_binary(circuit))
        data[4:8] = struct.pack("<I", 2)
        with pytest.raises(ArtifactError, match="version"):
            parse_r1cs_binary(bytes(data))


class TestJson:

    def test_load(self, circuit, tmp_path):
        path = tmp_path / "circuit.json"
        save_json(str(path), r1cs_to_json(circuit))
        cir = load_r1cs(str(path))
        assert cir.n_constraints == 3
        assert cir.constraints == circuit.constraints
        assert cir.input_wires == range(2, 4)

    def test_default_prime(self):
        cir = parse_r1cs_json({"nVars": 1, "nOutputs": 0, "nPubInputs": 0,
                               "nPrvInputs": 0, "constraints": []})
        assert cir.prime == CURVE_ORDER
        assert cir.n_labels == 1

    def test_missing_field(self):
        with pytest.raises(ArtifactError, match="nVars"):
            parse_r1cs_json({"constraints": []})

    def test_not_r1cs(self, tmp_path):
        path = tmp_path / "garbage.r1cs"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(ArtifactError):
            load_r1cs(str(path))

    def test_string_coefficients(self):
        cir = parse_r1cs_json(json.loads(
            '{"nVars": 3, "nOutputs": 1, "nPubInputs": 1, "nPrvInputs": 0,'
            ' "constraints": [[{"2": "1"}, {"0": "1"}, {"1": "1"}]]}'))
        assert cir.constraints == [({2: 1}, {0: 1}, {1: 1})]
