from tanbayes import LAPLACE, NAIVE, TAN, learn
from tanbayes.bif import render_bif, write_bif


def test_naive_bif(xor):
    text = render_bif(learn(xor, NAIVE, LAPLACE), name="xor")
    assert text.startswith("network xor {}\n\n")
    assert "variable class {\n  type discrete [ 2 ] { yes, no };\n}\n" in text
    assert "probability ( class ) {\n  table 0.5, 0.5;\n}\n" in text
    assert "probability ( A | class ) {\n  ( yes ) 0.5, 0.5;\n  ( no ) 0.5, 0.5;\n}\n" in text


def test_tan_bif_lists_tree_parent_first(xor, tmp_path):
    model = learn(xor, TAN, LAPLACE)
    path = tmp_path / "xor.bif"
    write_bif(model, path)
    text = path.read_text()
    assert "probability ( B | A, class ) {" in text
    assert "  ( a1, yes ) 0.6666666666666666, 0.3333333333333333;" in text
    assert text.count("probability (") == 3
