from zksnark.field import CURVE_ORDER
from zksnark.printr1cs import constraint_to_str, lc_to_str, print_r1cs
from zksnark.syms import extract_component, load_syms, parse_syms


class TestSyms:

    def test_names(self, sym):
        assert sym.var_idx_to_name[3] == "main.x"
        assert sym.label_idx_to_name[5] == "main.cube.out"
        assert sym.name_of(0) == "wire0"

    def test_components(self, sym):
        assert sym.component_idx_to_name == {0: "main", 1: "main.cube"}
        assert sym.var_idx_to_component[4] == 1

    def test_aliases_joined(self):
        sym = parse_syms("1,1,0,main.out\n2,1,1,main.c.out\n3,-1,1,main.c.tmp\n")
        assert sym.var_idx_to_name == {1: "main.out|main.c.out"}
        assert sym.label_idx_to_name[3] == "main.c.tmp"

    def test_malformed_lines_skipped(self):
        sym = parse_syms("garbage\n1,1,0\n\n2,2,0,main.a\n")
        assert sym.var_idx_to_name == {2: "main.a"}

    def test_extract_component(self):
        assert extract_component("main.cube.sq") == "main.cube"
        assert extract_component("main") == "main"

    def test_load(self, tmp_path):
        path = tmp_path / "circuit.sym"
        path.write_text("1,1,0,main.out\n", encoding="utf-8")
        assert load_syms(str(path)).name_of(1) == "main.out"


class TestPrintConstraints:

    def test_unit_coefficients(self, circuit, sym):
        assert constraint_to_str(circuit.constraints[0], circuit, sym) == \
            "[ main.x ] * [ main.x ] - [ main.cube.sq ] = 0"

    def test_sum_and_constant(self, circuit, sym):
        assert constraint_to_str(circuit.constraints[2], circuit, sym) == \
            "[ main.k +main.x +main.cube.out ] * [ 1 ] - [ main.out ] = 0"

    def test_negative_coefficient(self, circuit, sym):
        lc = {0: 7, 3: CURVE_ORDER - 2, 4: CURVE_ORDER - 1}
        assert lc_to_str(lc, circuit, sym) == "7 -2main.x -main.cube.sq"

    def test_print(self, circuit, sym, capsys):
        print_r1cs(circuit, sym)
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 3
        assert out[1] == "[ main.cube.sq ] * [ main.x ] - [ main.cube.out ] = 0"
