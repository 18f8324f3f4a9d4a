"""
증인(witness) 계산기
=====================

입력 신호 값으로부터 회로의 모든 와이어 값을 구한다.

**방법: 제약 전파(constraint propagation)**:
  상수 와이어(0)=1 과 입력 와이어를 먼저 채운 뒤, 미지 와이어가 정확히 하나인
  제약을 찾아 그 와이어에 대해 푼다.

      (a + a'·x) · (b + b'·x) = c + c'·x      (a', b' 중 하나는 0)
      ⇒  x = (c - a·b) / (a'·b + b'·a - c')

  a'·b' ≠ 0 (x² 항) 이거나 분모가 0 이면 그 제약은 건너뛰고 다른 제약으로
  값이 정해지기를 기다린다. 더 이상 진행할 수 없는데 미지 와이어가 남으면
  WitnessError.

**관찰 훅(hook)**:
  계산 순서대로 동기적으로 호출된다. 반환값은 사용하지 않는다.
    log_set_signal(wire, value)      : 와이어에 값이 정해질 때 (입력 포함)
    log_get_signal(wire, value)      : 제약을 풀면서 이미 아는 신호를 읽을 때 (상수 와이어 제외)
    log_start_component(cIdx)        : 다른 컴포넌트의 신호를 풀기 시작할 때
    log_finish_component(cIdx)       : 그 컴포넌트를 벗어날 때

사용 예시:
    >>> wc = WitnessCalculator(cir, sym)
    >>> wc.calculate_witness({"x": 3, "k": 5})
    [1, 35, 5, 3, 9, 27]
"""

import logging

from zksnark.errors import WitnessError

logger = logging.getLogger(__name__)


def flatten_inputs(inputs, prefix="main"):
    """{"in": [[1, 2], [3, 4]]} → {"main.in[0][0]": 1, ...}"""
    flat = {}

    def walk(name, value):
        if isinstance(value, (list, tuple)):
            for i, v in enumerate(value):
                walk(f"{name}[{i}]", v)
        else:
            flat[name] = value

    for key, value in inputs.items():
        name = key if key.startswith(prefix + ".") else f"{prefix}.{key}"
        walk(name, value)
    return flat


class WitnessCalculator:

    def __init__(self, cir, sym, sanity_check=False,
                 log_set_signal=None, log_get_signal=None,
                 log_start_component=None, log_finish_component=None):
        self.cir = cir
        self.sym = sym
        self.sanity_check = sanity_check
        self.log_set_signal = log_set_signal
        self.log_get_signal = log_get_signal
        self.log_start_component = log_start_component
        self.log_finish_component = log_finish_component

        self._name_to_wire = {}
        for wire, names in sym.var_idx_to_name.items():
            for name in names.split("|"):
                self._name_to_wire[name] = wire

    # ── hooks ──

    def _set(self, wire, value):
        self._values[wire] = value
        if self.log_set_signal is not None:
            self.log_set_signal(wire, value)

    def _get(self, wire):
        value = self._values[wire]
        if self.log_get_signal is not None:
            self.log_get_signal(wire, value)
        return value

    def _enter(self, wire):
        component = self.sym.var_idx_to_component.get(wire)
        if component is None or component == self._component:
            return
        if self._component is not None and self.log_finish_component is not None:
            self.log_finish_component(self._component)
        self._component = component
        if self.log_start_component is not None:
            self.log_start_component(component)

    # ── main ──

    def calculate_witness(self, inputs):
        p = self.cir.prime
        self._values = {0: 1}
        self._component = None

        input_wires = set(self.cir.input_wires)
        for name, value in flatten_inputs(inputs).items():
            if name not in self._name_to_wire:
                raise WitnessError(f"Input signal not found: {name}")
            wire = self._name_to_wire[name]
            if wire not in input_wires:
                raise WitnessError(f"Signal is not an input: {name}")
            self._enter(wire)
            self._set(wire, int(value) % p)

        missing = [w for w in input_wires if w not in self._values]
        if missing:
            names = ", ".join(self.sym.name_of(w) for w in missing)
            raise WitnessError(f"Missing input signals: {names}")

        pending = list(self.cir.constraints)
        progress = True
        while pending and progress:
            progress = False
            remaining = []
            for constraint in pending:
                solved = self._solve(constraint)
                if solved is None:
                    remaining.append(constraint)
                else:
                    progress = progress or solved
            pending = remaining

        if self._component is not None and self.log_finish_component is not None:
            self.log_finish_component(self._component)

        unknown = [w for w in range(self.cir.n_vars) if w not in self._values]
        if unknown:
            names = ", ".join(self.sym.name_of(w) for w in unknown)
            raise WitnessError(f"Cannot compute witness, undetermined signals: {names}")

        witness = [self._values[w] for w in range(self.cir.n_vars)]
        if self.sanity_check:
            self._check(witness)
        logger.debug("witness computed: %d wires", len(witness))
        return witness

    def _solve(self, constraint):
        """제약 하나를 푼다.

        Returns:
            None: 아직 풀 수 없음
            True: 와이어 하나를 새로 구함
            False: 모든 와이어가 이미 알려져 있음
        """
        p = self.cir.prime
        a, b, c = constraint
        unknown = {w for lc in constraint for w in lc if w not in self._values}
        if not unknown:
            return False
        if len(unknown) > 1:
            return None
        target = unknown.pop()

        def split(lc):
            known, coef = 0, 0
            for wire in sorted(lc):
                if wire == target:
                    coef = lc[wire] % p
                else:
                    known += lc[wire] * self._values[wire]
            return known % p, coef

        a_known, a_coef = split(a)
        b_known, b_coef = split(b)
        c_known, c_coef = split(c)
        if a_coef and b_coef:
            return None
        denominator = (a_coef * b_known + b_coef * a_known - c_coef) % p
        if denominator == 0:
            return None

        self._enter(target)
        for lc in constraint:
            for wire in sorted(lc):
                if wire not in (0, target):
                    self._get(wire)
        value = (c_known - a_known * b_known) * pow(denominator, -1, p) % p
        self._set(target, value)
        return True

    def _check(self, witness):
        p = self.cir.prime
        for i, (a, b, c) in enumerate(self.cir.constraints):
            av = sum(coef * witness[w] for w, coef in a.items()) % p
            bv = sum(coef * witness[w] for w, coef in b.items()) % p
            cv = sum(coef * witness[w] for w, coef in c.items()) % p
            if av * bv % p != cv:
                raise WitnessError(f"Constraint {i} doesn't match")
