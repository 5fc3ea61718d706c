"""
CLI entry point, when used as a module: `python -m kapply`.
"""
from kapply import cli

if __name__ == '__main__':
    cli.main()
