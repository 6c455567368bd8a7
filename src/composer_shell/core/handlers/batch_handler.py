# src/composer_shell/core/handlers/batch_handler.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from composer.errors import ConversionError
from composer.services.export_service import write_json
from composer.utils.loop_runner import run_on_main_loop
from composer.utils.run_timers import RunTimers
from composer_shell.core.context.shell_context import ShellContext
from composer_shell.core.managers.config_manager import config_manager
from composer_shell.core.services.conversion_service import convert_file, local_export_name
from composer_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

batch_help_text = """
  batch <dir> [-o <dir>]
      Converts every *.html file in <dir> with the static host and writes
      one JSON file per page.
""".strip()

COMMAND_HIERARCHY = None


def handle_batch(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """Handles the 'batch' command."""
    parser = argparse.ArgumentParser(prog="batch", description="Convert a directory of HTML files.")
    parser.add_argument("directory", help="Directory containing *.html files.")
    parser.add_argument("--output", "-o", help="Output directory.")

    if not args:
        parser.print_help()
        return 1
    try:
        pargs = parser.parse_args(args)
    except SystemExit:
        return 1

    source_dir = Path(pargs.directory).expanduser()
    if not source_dir.is_dir():
        print(f"❌ Error: '{source_dir}' is not a directory.")
        return 1

    files = sorted(source_dir.glob("*.html"))
    if not files:
        print(f"No HTML files found in {source_dir}.")
        return 0

    output_dir = (PathUtils.resolve_output_path(pargs.output) if pargs.output
                  else PathUtils.get_export_dir(config_manager.get_nested("export.output_dir")))
    output_dir.mkdir(parents=True, exist_ok=True)
    settings = config_manager.converter_settings()

    timer = RunTimers()
    timer.start()
    failures = 0
    for file_path in tqdm(files, desc="Converting", unit="page"):
        try:
            node = run_on_main_loop(convert_file(file_path, settings, session=ctx.session))
            write_json(node, output_dir / local_export_name(file_path))
        except (ConversionError, OSError, UnicodeDecodeError) as e:
            failures += 1
            logger.error("Failed to convert %s: %s", file_path.name, e)
    timer.stop()

    converted = len(files) - failures
    print(f"✅ Converted {converted}/{len(files)} pages into {output_dir} in {timer.duration:.2f}s.")
    return 0 if failures == 0 else 1
