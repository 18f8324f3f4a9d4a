import re

import pytest

from zksnark.artifacts import (
    Fq2, G1Point, G2Point, GrothProof, GrothVerificationKey, OriginalProof,
    OriginalVerificationKey, Protocol, proof_from_json,
)
from zksnark.errors import FieldElementOverflow, InvalidProof, TemplateError, TemplateNotFound
from zksnark.solidity import (
    VERIFIER_LAYOUT,
    generate_call,
    generate_verifier,
    ic_points,
    p256,
    render_template,
)


def decode(literal):
    assert literal.startswith('"0x') and literal.endswith('"')
    return int(literal[3:-1], 16)


def g2(a, b, c, d):
    return G2Point(Fq2(a, b), Fq2(c, d))


def groth_vk(protocol=Protocol.GROTH, n_ic=3):
    return GrothVerificationKey(
        protocol=protocol,
        vk_alfa_1=G1Point(11, 12),
        vk_beta_2=g2(21, 22, 23, 24),
        vk_gamma_2=g2(31, 32, 33, 34),
        vk_delta_2=g2(41, 42, 43, 44),
        IC=tuple(G1Point(100 + i, 200 + i) for i in range(n_ic)),
    )


def original_vk():
    return OriginalVerificationKey(
        vk_a=g2(1, 2, 3, 4), vk_b=G1Point(5, 6), vk_c=g2(7, 8, 9, 10),
        vk_g=g2(11, 12, 13, 14), vk_gb_1=G1Point(15, 16), vk_gb_2=g2(17, 18, 19, 20),
        vk_z=g2(21, 22, 23, 24), IC=(G1Point(25, 26), G1Point(27, 28)),
    )


class TestP256:

    def test_zero(self):
        assert p256(0) == '"0x' + "0" * 64 + '"'
        assert decode(p256(0)) == 0

    def test_max(self):
        literal = p256(2**256 - 1)
        assert literal == '"0x' + "f" * 64 + '"'
        assert decode(literal) == 2**256 - 1

    def test_padding(self):
        assert p256(255) == '"0x' + "0" * 62 + 'ff"'

    def test_overflow(self):
        with pytest.raises(FieldElementOverflow):
            p256(2**256)

    def test_negative(self):
        with pytest.raises(ValueError):
            p256(-1)

    def test_float(self):
        with pytest.raises(TypeError):
            p256(1.9)


class TestGenerateCall:

    def test_groth_ordering(self):
        proof = GrothProof(Protocol.GROTH, G1Point(1, 2), g2(3, 4, 5, 6), G1Point(7, 8))
        expected = (f"[{p256(1)},{p256(2)}],"
                    f"[[{p256(4)},{p256(3)}],[{p256(6)},{p256(5)}]],"
                    f"[{p256(7)},{p256(8)}],"
                    f"[{p256(9)}]")
        assert generate_call(proof, [9]) == expected

    def test_kimleeoh_same_as_groth(self):
        args = (G1Point(1, 2), g2(3, 4, 5, 6), G1Point(7, 8))
        assert generate_call(GrothProof(Protocol.KIMLEEOH, *args), [9, 10]) == \
            generate_call(GrothProof(Protocol.GROTH, *args), [9, 10])

    def test_original_ordering(self):
        proof = OriginalProof(
            pi_a=G1Point(1, 2), pi_ap=G1Point(3, 4), pi_b=g2(5, 6, 7, 8),
            pi_bp=G1Point(9, 10), pi_c=G1Point(11, 12), pi_cp=G1Point(13, 14),
            pi_h=G1Point(15, 16), pi_kp=G1Point(17, 18),
        )
        call = generate_call(proof, [19, 20])
        values = [decode(v) for v in re.findall(r'"0x[0-9a-f]{64}"', call)]
        assert values == [1, 2, 3, 4, 6, 5, 8, 7, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20]
        assert call.startswith(f"[{p256(1)},{p256(2)}],[{p256(3)},{p256(4)}],[[")
        assert call.endswith(f"[{p256(19)},{p256(20)}]")

    def test_untagged_proof_is_original(self):
        data = {name: [1, 2] for name in
                ("pi_a", "pi_ap", "pi_bp", "pi_c", "pi_cp", "pi_h", "pi_kp")}
        data["pi_b"] = [[3, 4], [5, 6]]
        call = generate_call(proof_from_json(data), [7])
        assert call.count("[[") == 1
        assert len(re.findall(r'"0x[0-9a-f]{64}"', call)) == 7 * 2 + 4 + 1

    def test_no_public_signals(self):
        proof = GrothProof(Protocol.GROTH, G1Point(1, 2), g2(3, 4, 5, 6), G1Point(7, 8))
        assert generate_call(proof, []).endswith("],[]")

    def test_unknown_protocol_object(self):
        class FakeProof:
            protocol = "plonk"
        with pytest.raises(InvalidProof):
            generate_call(FakeProof(), [])


class TestRenderTemplate:

    def test_single_pass(self):
        """치환된 값 안의 자리표시자는 다시 치환하지 않는다"""
        assert render_template("<%a%>-<%b%>", {"a": "<%b%>", "b": 2}) == "<%b%>-2"

    def test_repeated_placeholder(self):
        assert render_template("<%a%> <%a%>", {"a": 1}) == "1 1"

    def test_unresolved(self):
        with pytest.raises(TemplateError):
            render_template("<%a%> <%b%>", {"a": 1})

    def test_unused_value(self):
        with pytest.raises(TemplateError):
            render_template("<%a%>", {"a": 1, "c": 3})


class TestGenerateVerifier:

    def test_groth(self):
        text = generate_verifier(groth_vk())
        assert "<%" not in text
        assert "vk.alfa1 = Pairing.G1Point(11,12);" in text
        # G2 좌표는 [c1,c0] 순서
        assert "vk.beta2 = Pairing.G2Point([22,21], [24,23]);" in text
        assert "vk.delta2 = Pairing.G2Point([42,41], [44,43]);" in text
        assert "new Pairing.G1Point[](3)" in text
        assert "uint[2] memory input" in text

    def test_ic_lines(self):
        text = generate_verifier(groth_vk(n_ic=4))
        lines = [line for line in text.splitlines() if "vk.IC[" in line and "] = " in line]
        assert len(lines) == 4
        assert lines[0].strip() == "vk.IC[0] = Pairing.G1Point(100,200);"
        assert all(line.startswith(" " * 8 + "vk.IC[") for line in lines)

    def test_ic_points_separator(self):
        text = ic_points((G1Point(1, 2), G1Point(3, 4)))
        assert text == ("vk.IC[0] = Pairing.G1Point(1,2);\n"
                        "        vk.IC[1] = Pairing.G1Point(3,4);\n")

    def test_deterministic(self):
        assert generate_verifier(groth_vk()) == generate_verifier(groth_vk())

    def test_kimleeoh_uses_groth_template(self):
        assert generate_verifier(groth_vk(Protocol.KIMLEEOH)) == generate_verifier(groth_vk())
        assert VERIFIER_LAYOUT[Protocol.KIMLEEOH][0] == "verifier_groth.sol"

    def test_original(self):
        text = generate_verifier(original_vk())
        assert "<%" not in text
        assert "vk.A = Pairing.G2Point([2,1], [4,3]);" in text
        assert "vk.B = Pairing.G1Point(5,6);" in text
        assert "vk.gammaBeta1 = Pairing.G1Point(15,16);" in text
        assert "vk.Z = Pairing.G2Point([22,21], [24,23]);" in text
        assert "uint[1] memory input" in text
        assert "uint[2] memory a_p" in text

    def test_missing_template(self, tmp_path):
        with pytest.raises(TemplateNotFound):
            generate_verifier(groth_vk(), template_dir=str(tmp_path))

    def test_every_protocol_has_a_template(self):
        assert set(VERIFIER_LAYOUT) == set(Protocol)
