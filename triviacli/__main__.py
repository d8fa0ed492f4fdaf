"""Main entry point when executing triviacli as a package.

This allows running the package using python -m triviacli.
"""

from triviacli.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
