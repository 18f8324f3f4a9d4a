def lc_to_str(lc, cir, sym):
    """선형결합을 사람이 읽을 수 있는 문자열로.

    p/2 보다 큰 계수는 음수로 출력하고, 계수 1 은 생략한다.
    상수 와이어(0)는 이름 없이 계수만 출력한다.
    """
    terms = []
    for wire in sorted(lc):
        v = lc[wire] % cir.prime
        if v == 0:
            continue
        if v > cir.prime // 2:
            sign, v = "-", cir.prime - v
        else:
            sign = "+" if terms else ""
        name = "" if wire == 0 else sym.name_of(wire)
        if v == 1 and name:
            coef = ""
        else:
            coef = str(v)
        terms.append(f"{sign}{coef}{name}")
    return " ".join(terms)


def constraint_to_str(constraint, cir, sym):
    a, b, c = constraint
    return (f"[ {lc_to_str(a, cir, sym)} ] * [ {lc_to_str(b, cir, sym)} ] "
            f"- [ {lc_to_str(c, cir, sym)} ] = 0")


def print_r1cs(cir, sym):
    for constraint in cir.constraints:
        print(constraint_to_str(constraint, cir, sym))
