"""Allow ``python -m grammar_gen``."""

from grammar_gen.cli import main

if __name__ == "__main__":
    main()
