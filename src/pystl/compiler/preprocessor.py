import re

CONTEXT_NAME = "context"


def preprocess_python_code(code: str) -> str:
    """
    Rewrite template expression syntax in generated code into plain Python.

    ``$name`` reads a context variable (None when unset) and ``@name``
    references a module-level name such as a runtime helper:

    Example:
        out.write(output($user.name))  ->  out.write(output(context.get('user').name))
        for item in iterate(@rows):    ->  for item in iterate(rows):

    Python string literals are left untouched, so literal attribute text and
    markup written with ``out.write('...')`` keep their ``$`` and ``@``.
    """
    # Group 1: Strings (Triple double, Triple single, Double, Single)
    # Group 2: The $ or @ marker
    # Group 3: The identifier
    pattern = (
        r"(\"\"\"[\s\S]*?\"\"\"|'''[\s\S]*?'''|"  # Triple quoted strings
        r"\"(?:\\.|[^\\\"\n])*\"|'(?:\\.|[^\\'\n])*')|"  # Single quoted strings
        r"([$@])([a-zA-Z_]\w*)"  # The syntax we want to replace
    )

    def replacer(match):
        if match.group(1):
            return match.group(1)

        if match.group(2) == "$":
            return f"{CONTEXT_NAME}.get({match.group(3)!r})"
        return match.group(3)

    return re.sub(pattern, replacer, code, flags=re.MULTILINE)
