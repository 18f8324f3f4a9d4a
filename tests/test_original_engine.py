import dataclasses

import pytest

from zksnark.artifacts import OriginalProof, Protocol
from zksnark.errors import WitnessError
from zksnark.field import G1, ec_add, ec_mul, from_g1, to_g1
from zksnark.original.proving import gen_proof
from zksnark.original.verifying import is_valid

from conftest import EXPECTED_PUBLIC, EXPECTED_WITNESS


class TestSetup:

    def test_proving_key_shape(self, original_keys):
        vk_proof, _ = original_keys
        assert vk_proof["protocol"] == "original"
        # 와이어 6개 + Z(τ) 블라인딩 원소
        assert len(vk_proof["A"]) == 7
        assert len(vk_proof["B"]) == 7
        assert len(vk_proof["Kp"]) == 9
        assert len(vk_proof["hExps"]) == vk_proof["domainSize"] + 1

    def test_ic_is_public_part_of_a(self, original_keys):
        vk_proof, vk = original_keys
        assert [p.to_json() for p in vk.IC] == vk_proof["A"][:3]
        assert vk.protocol is Protocol.ORIGINAL


class TestVerifying:

    def test_valid(self, original_keys, original_proof):
        _, vk = original_keys
        proof, publics = original_proof
        assert publics == EXPECTED_PUBLIC
        assert is_valid(vk, proof, publics)

    def test_random_blinding(self, original_keys):
        vk_proof, vk = original_keys
        proof, publics = gen_proof(vk_proof, EXPECTED_WITNESS)
        assert is_valid(vk, proof, publics)

    def test_wrong_public_signal(self, original_keys, original_proof):
        _, vk = original_keys
        proof, _ = original_proof
        assert not is_valid(vk, proof, [36, 5])

    @pytest.mark.parametrize("field", ["pi_a", "pi_ap", "pi_bp", "pi_c", "pi_cp", "pi_h", "pi_kp"])
    def test_tampered_g1_element(self, original_keys, original_proof, field):
        _, vk = original_keys
        proof, publics = original_proof
        shifted = to_g1(ec_add(from_g1(getattr(proof, field)), G1))
        tampered = dataclasses.replace(proof, **{field: shifted})
        assert isinstance(tampered, OriginalProof)
        assert not is_valid(vk, tampered, publics)

    def test_tampered_knowledge_pair(self, original_keys, original_proof):
        """A 와 A' 를 같은 비율로 바꾸면 첫 검사는 통과하지만 나머지에서 걸린다"""
        _, vk = original_keys
        proof, publics = original_proof
        tampered = dataclasses.replace(
            proof,
            pi_a=to_g1(ec_mul(from_g1(proof.pi_a), 2)),
            pi_ap=to_g1(ec_mul(from_g1(proof.pi_ap), 2)),
        )
        assert not is_valid(vk, tampered, publics)

    def test_bad_witness(self, original_keys):
        vk_proof, _ = original_keys
        with pytest.raises(WitnessError):
            gen_proof(vk_proof, [1, 35, 5, 3, 9, 28])
