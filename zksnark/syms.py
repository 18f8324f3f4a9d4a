"""회로 디버그 심볼(.sym) 로더.

각 줄은 ``labelIdx,varIdx,componentIdx,name`` 형식이다. 최적화로 제거된 신호는
varIdx 가 -1 이다.
"""

import logging

logger = logging.getLogger(__name__)


class Symbols:

    def __init__(self):
        self.label_idx_to_name = {}
        self.var_idx_to_name = {}
        self.component_idx_to_name = {}
        # 와이어가 처음 등장한 컴포넌트
        self.var_idx_to_component = {}

    def name_of(self, wire):
        return self.var_idx_to_name.get(wire, f"wire{wire}")


def extract_component(name):
    return name.rsplit(".", 1)[0] if "." in name else name


def parse_syms(text):
    sym = Symbols()
    for line in text.splitlines():
        arr = line.strip().split(",")
        if len(arr) != 4:
            continue
        label_idx, var_idx, component_idx = int(arr[0]), int(arr[1]), int(arr[2])
        name = arr[3]

        sym.label_idx_to_name[label_idx] = name
        if var_idx >= 0:
            if var_idx in sym.var_idx_to_name:
                sym.var_idx_to_name[var_idx] += "|" + name
            else:
                sym.var_idx_to_name[var_idx] = name
                sym.var_idx_to_component[var_idx] = component_idx
        if component_idx not in sym.component_idx_to_name:
            sym.component_idx_to_name[component_idx] = extract_component(name)
    return sym


def load_syms(filename):
    with open(filename, "r", encoding="utf-8") as f:
        sym = parse_syms(f.read())
    logger.debug("loaded %d symbols from %s", len(sym.label_idx_to_name), filename)
    return sym
