import json

import pytest

from zksnark.errors import ArtifactError
from zksnark.utils import load_json, save_json, stringify_bigints, unstringify_bigints

BIG = 2**255 + 12345


class TestStringify:
    """큰 정수 → 10진수 문자열, 구조는 그대로"""

    def test_nested(self):
        data = {"a": [1, BIG, {"b": [2, 3]}], "protocol": "groth"}
        assert stringify_bigints(data) == {
            "a": ["1", str(BIG), {"b": ["2", "3"]}],
            "protocol": "groth",
        }

    def test_key_order_preserved(self):
        data = {"z": 1, "a": 2, "m": 3}
        assert list(stringify_bigints(data)) == ["z", "a", "m"]

    def test_tuple_becomes_list(self):
        assert stringify_bigints((1, 2)) == ["1", "2"]

    def test_bool_and_none_pass_through(self):
        assert stringify_bigints([True, False, None, 1.5]) == [True, False, None, 1.5]

    def test_output_is_plain_json(self):
        json.dumps(stringify_bigints({"x": [BIG, (BIG, 0)]}))


class TestUnstringify:

    def test_round_trip(self):
        data = {"IC": [[BIG, 2], [0, 1]], "nPublic": 1, "protocol": "original"}
        assert unstringify_bigints(stringify_bigints(data)) == data

    def test_non_numeric_strings_untouched(self):
        assert unstringify_bigints(["groth", "0x10", "-5", "1e3", ""]) == \
            ["groth", "0x10", "-5", "1e3", ""]

    def test_decimal_only_string_becomes_int(self):
        """원래 문자열이던 "123" 도 정수가 된다 (알려진 모호성)"""
        assert unstringify_bigints({"label": "123"}) == {"label": 123}

    def test_keys_untouched(self):
        assert unstringify_bigints({"7": "8"}) == {"7": 8}

    @pytest.mark.parametrize("text", ["12\n", "\n12", "12 "])
    def test_digits_with_whitespace_stay_strings(self, text):
        assert unstringify_bigints(stringify_bigints({"label": text})) == {"label": text}


class TestJsonFiles:

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "key.json"
        data = {"vk_alfa_1": [BIG, 2], "protocol": "groth"}
        save_json(str(path), data)

        text = path.read_text(encoding="utf-8")
        assert f'"{BIG}"' in text
        assert text.startswith('{\n "vk_alfa_1"')
        assert load_json(str(path)) == data

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ArtifactError):
            load_json(str(path))
