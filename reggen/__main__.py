import argparse
import sys
from pathlib import Path

from reggen.app import run_app


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='reggen', description='Generate C header/body and LaTeX documentation from a register layout')

    # Logging
    p.add_argument('--log-level', default=None, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    p.add_argument('--quiet', action='store_true', help='Reduce console output')

    sub = p.add_subparsers(dest='command', required=True)

    gen = sub.add_parser('generate', help='Write the generated files for a JSON descriptor')
    gen.add_argument('descriptor', type=Path, help='JSON descriptor (deviceName, baseAddress, bitWidth, registers, ...)')
    gen.add_argument('-o', '--output', type=Path, default=Path('.'), help='Output folder (default: current folder)')
    gen.add_argument('--pdf', action='store_true', help='Also typeset the documentation to PDF')
    gen.add_argument('--latex', default=None, help='Typesetting binary (default: pdflatex)')
    gen.add_argument('--graph', type=Path, default=None, help='Also draw the layout, e.g. layout.png; .gv/.dot writes the graphviz source')

    srv = sub.add_parser('serve', help='Run the HTTP service')
    srv.add_argument('--host', default=None, help='Bind address (default: 127.0.0.1)')
    srv.add_argument('--port', type=int, default=None, help='Port (default: 8000)')
    srv.add_argument('--latex', default=None, help='Typesetting binary (default: pdflatex)')

    return p


def main(argv: "list[str]" = None) -> int:
    args = build_parser().parse_args(argv)
    return run_app(args)


if __name__ == '__main__':
    sys.exit(main())
