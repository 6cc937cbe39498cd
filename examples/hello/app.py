"""Hello World -- the simplest blockfold example.

Compile one block component from a string and print the rewritten module.
No files needed.

Run:
    python app.py
"""

from blockfold import Compiler

compiler = Compiler()

SOURCE = """\
import { block } from "million/react";

const Greeting = block(({ name }) => <h1 class="greeting">Hello, {name}!</h1>);
"""

# Compile from string
result = compiler.compile(SOURCE, filename="Greeting.jsx")

output = result.code


def main() -> None:
    print(output)

    # What the compiler extracted
    for block in result.blocks:
        print(f"{block.name}: slots={list(block.keys)} portals={list(block.portals)}")


if __name__ == "__main__":
    main()
