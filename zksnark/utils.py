"""
큰 정수(big integer) ⇄ 문자열 변환 및 JSON 산출물 입출력
==========================================================

JSON 숫자는 2^53 이상의 정수를 안전하게 표현하지 못한다 (대부분의 JS 도구가
double로 읽는다). 그래서 모든 산출물은 정수를 10진수 문자열로 바꿔서 저장하고,
읽을 때 다시 정수로 되돌린다.

    stringify_bigints({"a": [1, 2**255]})   →  {"a": ["1", "5789...."]}
    unstringify_bigints({"a": ["1", "57.."]}) → {"a": [1, 5789....]}

**모호한 경우**:
  원래부터 숫자로만 이루어진 문자열 값 ("123") 은 unstringify 후 정수가 된다.
  프로토콜별 필드가 정해진 검증 키/증명은 ``zksnark.artifacts`` 의 타입 변환이
  필드마다 명시적으로 정수화하므로 이 휴리스틱에 의존하지 않는다.
"""

import json
import logging
import re

from zksnark.errors import ArtifactError

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[0-9]+")


def stringify_bigints(o):
    if isinstance(o, bool):
        return o
    if isinstance(o, int):
        return str(o)
    if isinstance(o, (list, tuple)):
        return [stringify_bigints(v) for v in o]
    if isinstance(o, dict):
        return {k: stringify_bigints(v) for k, v in o.items()}
    return o


def unstringify_bigints(o):
    if isinstance(o, str) and _DECIMAL.fullmatch(o):
        return int(o)
    if isinstance(o, list):
        return [unstringify_bigints(v) for v in o]
    if isinstance(o, dict):
        return {k: unstringify_bigints(v) for k, v in o.items()}
    return o


def load_json(filename):
    """JSON 산출물을 읽어 큰 정수를 복원한다."""
    logger.debug("reading %s", filename)
    try:
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"{filename}: malformed JSON ({e})") from e
    return unstringify_bigints(data)


def save_json(filename, data):
    """큰 정수를 문자열로 바꿔 JSON 산출물로 저장한다 (indent=1)."""
    logger.debug("writing %s", filename)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(json.dumps(stringify_bigints(data), indent=1))
