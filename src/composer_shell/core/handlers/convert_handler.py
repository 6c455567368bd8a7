# src/composer_shell/core/handlers/convert_handler.py
from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from composer.errors import ConversionError
from composer.services.export_service import write_json
from composer.style.engine import StyleMode
from composer.utils.loop_runner import run_on_main_loop
from composer_shell.core.context.shell_context import ShellContext
from composer_shell.core.managers.config_manager import config_manager
from composer_shell.core.services.conversion_service import convert_target, load_json_file
from composer_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

convert_help_text = """
  convert <file|url> [-o <path>] [--mappings <file>] [--tokens <file>] [--mode <mode>] [--stdout]
      Converts an HTML file (static host) or an http(s) URL (Chromium) into
      composable JSON. Saves to the export directory unless -o is given.
      <mode> is one of: all, inheritedOnly, uaDiff, uaDiffPlusInherited.
""".strip()

COMMAND_HIERARCHY = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="convert", description="Convert a page to composable JSON.")
    parser.add_argument("target", help="HTML file path or http(s) URL.")
    parser.add_argument("--output", "-o", help="Output file (absolute or relative to the export directory).")
    parser.add_argument("--mappings", help="JSON file with a list of component mappings.")
    parser.add_argument("--tokens", help="JSON file with design tokens.")
    parser.add_argument("--mode", choices=[m.value for m in StyleMode], help="Style capture mode.")
    parser.add_argument("--stdout", action="store_true", help="Print the JSON instead of writing a file.")
    return parser


def handle_convert(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """Handles the 'convert' command."""
    parser = build_parser()
    if not args:
        parser.print_help()
        return 1

    try:
        pargs = parser.parse_args(args)
    except SystemExit:
        return 1

    try:
        mappings = load_json_file(pargs.mappings, [])
        tokens = load_json_file(pargs.tokens, {})
    except (OSError, ValueError) as e:
        print(f"❌ Error: Could not read input file: {e}")
        return 1

    overrides = {"style_mode": pargs.mode} if pargs.mode else {}
    settings = config_manager.converter_settings(**overrides)

    try:
        node, default_name = run_on_main_loop(
            convert_target(pargs.target, settings, session=ctx.session, mappings=mappings, tokens=tokens)
        )
    except ConversionError as e:
        print(f"❌ Conversion failed: {e}")
        return 1
    except Exception as e:
        logger.error("Convert failed: %s", e, exc_info=True)
        print(f"❌ Convert error: {e}")
        return 1

    if pargs.stdout:
        print(json.dumps(node.to_dict(), indent=2, ensure_ascii=False))
        return 0

    if pargs.output:
        output_file = PathUtils.resolve_output_path(pargs.output)
    else:
        output_file = PathUtils.get_export_dir(config_manager.get_nested("export.output_dir")) / default_name

    write_json(node, output_file)
    print(f"✅ Converted {pargs.target} -> {output_file}")
    return 0
