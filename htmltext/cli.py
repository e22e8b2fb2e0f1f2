"""Command-line interface for htmltext."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml
from pydantic import ValidationError

from .from_text import from_text
from .minify import minify
from .models import ConversionConfig, FromTextOptions, SanitizeOptions
from .render import to_text
from .sanitize import sanitize, strip_tags
from .tree import DEFAULT_PARSER, PARSERS

logger = logging.getLogger(__name__)


def _load_config(path: Optional[str]) -> ConversionConfig:
    if not path:
        return ConversionConfig()
    config_path = Path(path)
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise SystemExit(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SystemExit(f"{config_path} must contain a mapping of options.")
    try:
        return ConversionConfig.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid options in {config_path}: {exc}") from exc


def _read_input(args: argparse.Namespace) -> str:
    if not args.input:
        return sys.stdin.read()
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    return input_path.read_text(encoding="utf-8")


def _write_output(args: argparse.Namespace, content: str) -> None:
    if not args.output:
        sys.stdout.write(content + "\n")
        return
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    logger.info("wrote %s", output_path)


def _parser_name(args: argparse.Namespace, config: ConversionConfig) -> str:
    return args.parser or config.parser


def _handle_minify(args: argparse.Namespace) -> None:
    config = _load_config(args.config)
    overrides = {}
    if args.conservative:
        overrides["conservative_collapse"] = True
    if args.no_collapse:
        overrides["collapse_whitespace"] = False
    if args.collapse_inline:
        overrides["collapse_inline_tag_whitespace"] = True
    if args.minify_js:
        overrides["minify_js"] = True
    if args.minify_css:
        overrides["minify_css"] = True
    options = config.minify.model_copy(update=overrides)
    html = _read_input(args)
    _write_output(args, minify(html, options, parser=_parser_name(args, config)))


def _handle_text(args: argparse.Namespace) -> None:
    config = _load_config(args.config)
    options = config.render
    if args.no_format:
        options = options.model_copy(update={"format": False})
    html = _read_input(args)
    _write_output(args, to_text(html, options, parser=_parser_name(args, config)))


def _handle_strip(args: argparse.Namespace) -> None:
    html = _read_input(args)
    _write_output(args, strip_tags(html, args.tags or (), parser=args.parser or DEFAULT_PARSER))


def _parse_allow(values: Iterable[str]) -> Dict[str, List[str]]:
    """Parse ``tag`` or ``tag:attr,attr`` allow-list entries."""
    allowed: Dict[str, List[str]] = {}
    for value in values:
        name, _, attrs = value.partition(":")
        name = name.strip().lower()
        if not name:
            raise SystemExit(f"Invalid --allow entry: {value!r}")
        allowed[name] = [attr.strip() for attr in attrs.split(",") if attr.strip()]
    return allowed


def _handle_sanitize(args: argparse.Namespace) -> None:
    config = _load_config(args.config)
    options: SanitizeOptions = config.sanitize
    if args.allow:
        options = SanitizeOptions(tags=_parse_allow(args.allow))
    html = _read_input(args)
    _write_output(args, sanitize(html, options.tags, parser=_parser_name(args, config)))


def _handle_from_text(args: argparse.Namespace) -> None:
    config = _load_config(args.config)
    options: FromTextOptions = config.from_text
    update = {}
    if args.tag:
        update["tag"] = args.tag
    if args.no_escape:
        update["escape"] = False
    options = options.model_copy(update=update)
    text = _read_input(args)
    _write_output(args, from_text(text, tag=options.tag, escape=options.escape))


def _add_io_arguments(parser: argparse.ArgumentParser, *, config: bool = True) -> None:
    parser.add_argument(
        "--in",
        dest="input",
        help="Path to read. Reads standard input when omitted.",
    )
    parser.add_argument(
        "--out",
        dest="output",
        help="Path to write. Writes standard output when omitted.",
    )
    parser.add_argument(
        "--parser",
        choices=PARSERS,
        help="BeautifulSoup tree builder (default: lxml or the config value).",
    )
    if config:
        parser.add_argument(
            "--config",
            help="YAML file with parser, minify, render, sanitize and fromText options.",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htmltext",
        description="Minify HTML and render it as readable plain text",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="htmltext 0.1.0",
        help="Show the htmltext version and exit.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug details to standard error.",
    )

    subparsers = parser.add_subparsers(dest="command")

    minify_parser = subparsers.add_parser(
        "minify",
        help="Collapse whitespace and strip comments.",
        description="Minify HTML by collapsing whitespace in text nodes.",
    )
    _add_io_arguments(minify_parser)
    minify_parser.add_argument(
        "--conservative",
        action="store_true",
        help="Always leave at least one space where whitespace was.",
    )
    minify_parser.add_argument(
        "--no-collapse",
        dest="no_collapse",
        action="store_true",
        help="Do not trim whitespace next to block elements.",
    )
    minify_parser.add_argument(
        "--collapse-inline",
        dest="collapse_inline",
        action="store_true",
        help="Remove single spaces between inline elements.",
    )
    minify_parser.add_argument(
        "--minify-js",
        dest="minify_js",
        action="store_true",
        help="Strip comments and line breaks from inline scripts.",
    )
    minify_parser.add_argument(
        "--minify-css",
        dest="minify_css",
        action="store_true",
        help="Strip comments and line breaks from inline styles.",
    )
    minify_parser.set_defaults(func=_handle_minify)

    text_parser = subparsers.add_parser(
        "text",
        help="Render HTML as plain text.",
        description="Render headings, lists, tables, links and images as text.",
    )
    _add_io_arguments(text_parser)
    text_parser.add_argument(
        "--no-format",
        dest="no_format",
        action="store_true",
        help="Produce flatter, line-oriented text.",
    )
    text_parser.set_defaults(func=_handle_text)

    strip_parser = subparsers.add_parser(
        "strip",
        help="Remove elements and their content.",
        description="Remove the named elements with their content; with no --tag the markup is only re-serialized.",
    )
    _add_io_arguments(strip_parser, config=False)
    strip_parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        help="Element name to remove (repeatable).",
    )
    strip_parser.set_defaults(func=_handle_strip)

    sanitize_parser = subparsers.add_parser(
        "sanitize",
        help="Keep only allow-listed tags and attributes.",
        description="Filter HTML against a tag/attribute allow-list.",
    )
    _add_io_arguments(sanitize_parser)
    sanitize_parser.add_argument(
        "--allow",
        action="append",
        help="Allowed tag, optionally with attributes: a:href,title (repeatable).",
    )
    sanitize_parser.set_defaults(func=_handle_sanitize)

    from_text_parser = subparsers.add_parser(
        "from-text",
        help="Convert plain text into HTML paragraphs.",
        description="Wrap blank-line separated paragraphs in tags.",
    )
    _add_io_arguments(from_text_parser)
    from_text_parser.add_argument("--tag", help="Element used for each paragraph (default: p).")
    from_text_parser.add_argument(
        "--no-escape",
        dest="no_escape",
        action="store_true",
        help="Insert the text without escaping it.",
    )
    from_text_parser.set_defaults(func=_handle_from_text)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
