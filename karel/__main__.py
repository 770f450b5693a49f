"""CLI entry point for the Karel interpreter.

Usage:
    python -m karel [-v|-vv|-vvv] [--world WORLD_JSON] <program_file> [...]
    python -m karel --check <program_file> [...]
    python -m karel --emit-outline <program_file> [...]

Options:
  -v                  Increase debug verbosity (can be repeated)
  --world             JSON description of the starting world
  --max-call-depth    Deepest allowed nesting of procedure calls
  --check             Check the block structure of the program and exit
  --emit-outline      Write the program outline as JSON next to the first file

Several program files are concatenated in the order given. Without
`--world` the robot starts at (1, 1) facing east in an empty 10x10 world
with an unlimited beeper bag. After a successful run the final world is
printed. Debug information is written to `debug.txt` in the current
directory when verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast_json import outline_to_obj
from .errors import KarelError
from .interpreter import DEFAULT_MAX_CALL_DEPTH, load_program
from .parser import parse_outline, parse_program
from .world import World


def require_files(paths: list[str]) -> None:
    for path in paths:
        program_file = Path(path)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Karel language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--world', metavar='WORLD_JSON', help='starting world description')
    parser.add_argument('--max-call-depth', type=int, default=DEFAULT_MAX_CALL_DEPTH,
                        help='deepest allowed nesting of procedure calls')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--check', action='store_true', help='check the block structure and exit')
    group.add_argument('--emit-outline', action='store_true', help='emit the program outline as JSON')
    parser.add_argument('programs', nargs='+', metavar='program', help='Karel program file(s) to execute')
    args = parser.parse_args(argv)
    require_files(args.programs)

    # Static modes
    if args.check or args.emit_outline:
        program = parse_program(Path(p).read_text(encoding='utf-8') for p in args.programs)
        try:
            outline = parse_outline(program)
        except KarelError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if args.check:
            print('ok')
            return
        first = Path(args.programs[0])
        out_path = first.with_name(first.name + '.outline.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(outline_to_obj(outline), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Default: execute against a world
    if args.world:
        try:
            world = World.load(args.world)
        except (OSError, ValueError) as e:
            print(f"Error: cannot load world {args.world}: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        world = World(10, 10)
    interpreter = load_program(args.programs, world, debug_level=args.v,
                               max_call_depth=args.max_call_depth)
    try:
        interpreter.run()
    except KarelError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        print(world.render())
        sys.exit(1)
    print(world.render())


if __name__ == '__main__':
    main()
