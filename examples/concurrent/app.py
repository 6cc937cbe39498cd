"""Concurrent compilation -- one Compiler shared by 8 threads.

A Compiler holds only immutable configuration. Each compile() call owns its
parse tree, scopes and edits, so there is zero cross-contamination between
files compiled at the same time.

Run:
    python app.py
"""

from concurrent.futures import ThreadPoolExecutor

from blockfold import Compiler

compiler = Compiler()

# Each thread compiles a different module
MODULE_SOURCE = """\
import {{ block }} from "million/react";

const Page{n} = block(({{ tags }}) => (
  <article id="page-{n}">
    <h1>Page {n}</h1>
    <ul>{{tags.map((tag) => <li>{{tag}}</li>)}}</ul>
    <Sidebar{n} />
  </article>
));
"""

modules = {f"Page{i}.jsx": MODULE_SOURCE.format(n=i) for i in range(8)}


def compile_module(item: tuple[str, str]):
    """Compile a single module -- called from a worker thread."""
    filename, source = item
    return compiler.compile(source, filename=filename)


with ThreadPoolExecutor(max_workers=8) as pool:
    results = list(pool.map(compile_module, modules.items()))

output = "\n".join(result.code for result in results)


def main() -> None:
    print(f"Compiled {len(results)} modules across 8 threads:\n")
    for result in results:
        print(f"--- {result.filename} ---")
        print(result.code)


if __name__ == "__main__":
    main()
