"""Command line driver: apply a filter stack to an image file.

Usage:
    filterstag photo.jpg out.png -f "blur 3 1.5" -f "hue 90"
    filterstag photo.jpg out.png --stack stack.json
    filterstag --list
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PIL import Image as PILImage

from .codec import decode, encode
from .config import settings
from .filters import Filter, get_all_filters_info
from .layers import LayerStack

logger = logging.getLogger(__name__)


def build_stack(filter_texts: list[str], stack_file: str | None = None) -> LayerStack:
    """Build a stack from a saved JSON document followed by ``-f`` filters."""
    if stack_file:
        stack = LayerStack.from_json(Path(stack_file).read_text(encoding='utf-8'))
    else:
        stack = LayerStack()
    for text in filter_texts:
        stack.add(Filter.parse(text))
    return stack


def output_format(path: str) -> str | None:
    """Pillow format name for a file's extension, e.g. '.tif' -> 'TIFF'.

    Returns None for unknown extensions so the configured default applies.
    """
    return PILImage.registered_extensions().get(Path(path).suffix.lower())


def list_filters() -> str:
    """Human-readable list of filters, their aliases and parameters."""
    lines = []
    for info in get_all_filters_info():
        aliases = f" (aliases: {', '.join(info.aliases)})" if info.aliases else ''
        lines.append(f"{info.name}{aliases}")
        lines.append(f"    {info.description}")
        for p in info.parameters:
            lines.append(
                f"    {p.name}: {p.type} {p.min_value}..{p.max_value}, default {p.default}"
            )
    return '\n'.join(lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='filterstag',
        description='Apply a stack of image filters to an image file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s in.jpg out.png -f "gray 20 10"        # Black & white
  %(prog)s in.jpg out.png -f blur -f "sharpen 2"  # Blur then sharpen
  %(prog)s in.png out.png --stack stack.json      # Saved stack
  %(prog)s --list                                 # Available filters
"""
    )
    parser.add_argument('input', nargs='?', help='Input image file')
    parser.add_argument('output', nargs='?', help='Output image file')
    parser.add_argument(
        '--filter', '-f',
        action='append',
        default=[],
        help='Filter to append to the stack, e.g. "blur 3 2.0" (repeatable)'
    )
    parser.add_argument('--stack', help='JSON stack document to start from')
    parser.add_argument('--save-stack', help='Write the resulting stack as JSON')
    parser.add_argument(
        '--format',
        default=None,
        help=f'Output format (default: from extension, else {settings.ENCODE_FORMAT})'
    )
    parser.add_argument('--list', action='store_true', help='List available filters')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.list:
        print(list_filters())
        return 0

    if not args.input or not args.output:
        parser.error('input and output are required unless --list is given')

    try:
        stack = build_stack(args.filter, args.stack)
        base = decode(Path(args.input).read_bytes())
        result = stack.compose(base)

        fmt = args.format or output_format(args.output)
        Path(args.output).write_bytes(encode(result, fmt))
        if args.save_stack:
            Path(args.save_stack).write_text(stack.to_json(), encoding='utf-8')
    except (OSError, ValueError) as e:
        logger.error(f"{e}")
        return 1

    logger.info(f"Wrote {args.output} ({len(stack.enabled_layers())} layer(s))")
    return 0


if __name__ == '__main__':
    sys.exit(main())
