"""
FR 위의 다항식 연산과 R1CS → QAP 변환
======================================

다항식은 계수 리스트 ``[c0, c1, c2, ...]`` (낮은 차수부터) 로 표현한다.

**QAP 도메인**:
  제약 j (j = 1 .. m) 는 평가점 x = j 에 대응한다. m 은 회로의 제약 수에
  공개 와이어 수 + 1 을 더한 값이다. 공개 와이어 s (상수 와이어 0 포함) 마다
  A 쪽에만 1 이 있는 제약을 하나씩 추가하는데, 이렇게 하면 IC 에 들어가는
  A_s(x) 들이 서로 선형 독립이 된다 (A·B = C 는 0·... = 0 으로 항상 성립).

  Z(x) = (x - 1)(x - 2)...(x - m)

**Setup 측**: τ 에서 각 와이어 다항식의 값 A_i(τ), B_i(τ), C_i(τ) 를 Lagrange
기저 L_j(τ) 로 바로 계산한다 (와이어마다 보간하지 않음).

**Prover 측**: 증인 w 로 A(x) = Σ w_i·A_i(x) 등을 보간하고
H(x) = (A(x)·B(x) - C(x)) / Z(x) 를 구한다. 나머지가 0 이 아니면
증인이 제약을 만족하지 않는 것이다.
"""

from zksnark.errors import WitnessError
from zksnark.field import FR
from zksnark.r1cs import R1CS


def multiply_polys(a, b):
    if not a or not b:
        return []
    o = [FR(0)] * (len(a) + len(b) - 1)
    for i in range(len(a)):
        for j in range(len(b)):
            o[i + j] += a[i] * b[j]
    return o


def add_polys(a, b, subtract=False):
    o = [FR(0)] * max(len(a), len(b))
    for i in range(len(a)):
        o[i] += a[i]
    for i in range(len(b)):
        o[i] += b[i] * (FR(-1) if subtract else FR(1))
    return o


def subtract_polys(a, b):
    return add_polys(a, b, subtract=True)


def scale_poly(poly, k):
    return [c * k for c in poly]


def div_polys(a, b):
    """a / b 의 몫과 나머지."""
    o = [FR(0)] * max(len(a) - len(b) + 1, 0)
    remainder = a
    while len(remainder) >= len(b):
        if b[-1] == 0:
            raise ZeroDivisionError("Division by zero polynomial")
        leading_fac = remainder[-1] / b[-1]
        pos = len(remainder) - len(b)
        o[pos] = leading_fac
        remainder = subtract_polys(remainder, multiply_polys(b, [FR(0)] * pos + [leading_fac]))[:-1]
    return o, remainder


def eval_poly(poly, x):
    return sum([poly[i] * x**i for i in range(len(poly))], FR(0))


def mk_singleton(point_loc, height, total_pts):
    fac = FR(1)
    for i in range(1, total_pts + 1):
        if i != point_loc:
            fac *= FR(point_loc - i)
    o = [FR(height) / fac]
    for i in range(1, total_pts + 1):
        if i != point_loc:
            o = multiply_polys(o, [FR(-i), FR(1)])
    return o


def lagrange_interp(vec):
    """점 1..len(vec) 에서 vec 값을 갖는 다항식."""
    o = []
    for i in range(len(vec)):
        if vec[i] == 0:
            continue
        o = add_polys(o, mk_singleton(i + 1, FR(vec[i]), len(vec)))
    return o


def vanishing_poly(m):
    z = [FR(1)]
    for i in range(1, m + 1):
        z = multiply_polys(z, [FR(-i), FR(1)])
    return z


def lagrange_basis_at(tau, m):
    """[L_1(τ), ..., L_m(τ)]: 점 1..m 위의 Lagrange 기저를 τ 에서 평가."""
    basis = []
    for j in range(1, m + 1):
        num = FR(1)
        den = FR(1)
        for k in range(1, m + 1):
            if k == j:
                continue
            num *= tau - k
            den *= FR(j - k)
        basis.append(num / den)
    return basis


# ─────────────────────────────────────────────────────────────────────
# R1CS → QAP
# ─────────────────────────────────────────────────────────────────────

def qap_constraints(cir):
    """회로 제약 + 공개 와이어 제약 (A 쪽에만 1)."""
    constraints = list(cir.constraints)
    for s in range(cir.n_public + 1):
        constraints.append(({s: 1}, {}, {}))
    return constraints


def circuit_from_proving_key(vk_proof):
    """증명 키의 polsA/polsB/polsC 로부터 제약 시스템을 복원한다."""
    n_constraints = vk_proof["domainSize"] - vk_proof["nPublic"] - 1
    constraints = [({}, {}, {}) for _ in range(n_constraints)]
    for slot, key in enumerate(("polsA", "polsB", "polsC")):
        for wire, pol in enumerate(vk_proof[key]):
            for j, coef in pol.items():
                constraints[int(j)][slot][wire] = int(coef)
    return R1CS(n_vars=vk_proof["nVars"], n_outputs=vk_proof["nPublic"],
                constraints=constraints)


def wire_values_at(cir, tau):
    """τ 에서의 A_i(τ), B_i(τ), C_i(τ) (와이어별) 와 Z(τ), 도메인 크기 m."""
    constraints = qap_constraints(cir)
    m = len(constraints)
    basis = lagrange_basis_at(tau, m)

    Ax_val = [FR(0)] * cir.n_vars
    Bx_val = [FR(0)] * cir.n_vars
    Cx_val = [FR(0)] * cir.n_vars
    for j, (a, b, c) in enumerate(constraints):
        for wire, coef in a.items():
            Ax_val[wire] += basis[j] * coef
        for wire, coef in b.items():
            Bx_val[wire] += basis[j] * coef
        for wire, coef in c.items():
            Cx_val[wire] += basis[j] * coef

    Zx_val = FR(1)
    for i in range(1, m + 1):
        Zx_val *= tau - i
    return Ax_val, Bx_val, Cx_val, Zx_val, m


def _lc_value(lc, witness):
    total = FR(0)
    for wire, coef in lc.items():
        total += FR(coef) * witness[wire]
    return total


def solution_polynomials(cir, witness):
    """증인 w 에 대한 A(x), B(x), C(x)."""
    witness = [FR(w) for w in witness]
    if len(witness) != cir.n_vars:
        raise WitnessError(
            f"Witness has {len(witness)} values, circuit has {cir.n_vars} wires")
    constraints = qap_constraints(cir)
    Apoly = lagrange_interp([_lc_value(a, witness) for a, _, _ in constraints])
    Bpoly = lagrange_interp([_lc_value(b, witness) for _, b, _ in constraints])
    Cpoly = lagrange_interp([_lc_value(c, witness) for _, _, c in constraints])
    return Apoly, Bpoly, Cpoly, len(constraints)


def create_divisor_polynomial(Apoly, Bpoly, Cpoly, Z):
    """H(x) = (A·B - C) / Z. 나머지가 0 이 아니면 WitnessError."""
    sol = subtract_polys(multiply_polys(Apoly, Bpoly), Cpoly)
    Hx, remainder = div_polys(sol, Z)
    if any(r != 0 for r in remainder):
        raise WitnessError("Witness does not satisfy the constraint system")
    return Hx
