from pystl.compiler.preprocessor import preprocess_python_code


def test_context_variables() -> None:
    assert preprocess_python_code("x = $count") == "x = context.get('count')"
    assert (
        preprocess_python_code("out.write(output($user.name))")
        == "out.write(output(context.get('user').name))"
    )


def test_references() -> None:
    assert preprocess_python_code("iterate(@rows)") == "iterate(rows)"


def test_strings_are_untouched() -> None:
    code = "out.write('cost: $5 @home')"
    assert preprocess_python_code(code) == code
    code = 'out.write("it\'s $x")'
    assert preprocess_python_code(code) == code
    code = "out.write('it\\'s $x') + $y"
    assert preprocess_python_code(code) == "out.write('it\\'s $x') + context.get('y')"


def test_bare_markers_are_left_alone() -> None:
    assert preprocess_python_code("a $ b") == "a $ b"
