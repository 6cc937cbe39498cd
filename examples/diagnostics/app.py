"""Diagnostics -- deoptimized components and parse errors.

Async and generator components cannot become compiled blocks. The compiler
rewrites ``block(Component)`` to the plain component, records a diagnostic
and keeps compiling the rest of the file. Syntax errors fail the file.

Run:
    python app.py
"""

import logging

from blockfold import Compiler, ParseError

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

compiler = Compiler()

SOURCE = """\
import { block } from "million/react";

const Profile = block(async ({ id }) => <section>{await load(id)}</section>);

const Feed = block(function* Feed() {
  yield <ul />;
});

const Badge = block(({ label }) => <span class="badge">{label}</span>);
"""

# Deoptimized calls are logged at WARNING and collected on the result
result = compiler.compile(SOURCE, filename="src/Profile.jsx")

diagnostics = result.diagnostics
compact = [diagnostic.format_compact() for diagnostic in diagnostics]

# Syntax errors raise
try:
    compiler.compile("const App = <div>;\n", filename="Broken.jsx")
except ParseError as exc:
    parse_error = exc
else:
    parse_error = None


def main() -> None:
    print(result.code)
    for diagnostic in diagnostics:
        print(diagnostic.format())
        print()
    if parse_error is not None:
        print(parse_error)


if __name__ == "__main__":
    main()
