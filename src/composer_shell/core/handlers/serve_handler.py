# src/composer_shell/core/handlers/serve_handler.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from composer.controllers.convert_controller import ConvertController, build_converter
from composer.server.app import create_app
from composer.services.message_service import DEFAULT_ALLOWED_ORIGINS, MessageHandler
from composer.utils.loop_runner import ensure_background_loop, run_on_main_loop
from composer_shell.core.context.shell_context import ShellContext
from composer_shell.core.managers.config_manager import config_manager
from composer_shell.core.services.conversion_service import (
    browser_session_from_config, capture_live_page, parse_html, static_controller,
)
from renderer.services.baseline_probe_service import PlaywrightBaselineProvider

logger = logging.getLogger(__name__)

serve_help_text = """
  serve (--file <path> | --url <url>) [--host <host>] [--port <N>]
      Starts the message bridge: POST /api/messages answers
      request-html-to-json messages from the allowed origins with the
      converted page. GET /api/health reports whether a result is cached.
""".strip()

COMMAND_HIERARCHY = None


def handle_serve(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """Handles the 'serve' command. Blocks until the server is stopped."""
    parser = argparse.ArgumentParser(prog="serve", description="Serve conversions over HTTP.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", help="Local HTML file to serve conversions of.")
    source.add_argument("--url", help="Page to render in Chromium and serve conversions of.")
    parser.add_argument("--host", default=config_manager.get_nested("server.host", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=config_manager.get_nested("server.port", 5005))

    try:
        pargs = parser.parse_args(args)
    except SystemExit:
        return 1

    ensure_background_loop()
    settings = config_manager.converter_settings()
    browser = None

    try:
        if pargs.file:
            path = Path(pargs.file).expanduser()
            page_url = path.resolve().as_uri()
            root = parse_html(path.read_text(encoding="utf-8"))
            controller = static_controller(page_url, settings, ctx.session)
        else:
            browser = browser_session_from_config()
            captured = run_on_main_loop(capture_live_page(pargs.url, browser))
            page_url, root = captured.url, captured.body
            converter = build_converter(captured.source, PlaywrightBaselineProvider(browser), settings)
            controller = ConvertController(converter, ctx.session)
    except Exception as e:
        logger.error("Could not prepare the page: %s", e, exc_info=True)
        print(f"❌ Error: Could not prepare the page: {e}")
        if browser is not None:
            run_on_main_loop(browser.close())
        return 1

    handler = MessageHandler(
        controller,
        lambda: root,
        allowed_origins=config_manager.get_nested("messaging.allowed_origins", list(DEFAULT_ALLOWED_ORIGINS)),
        page_url=page_url,
    )
    app = create_app(handler)

    print("\n" + "=" * 50)
    print(f"🚀  COMPOSER BRIDGE | {page_url}")
    print("=" * 50)
    print(f"📡  http://{pargs.host}:{pargs.port}/api/messages")
    print("-" * 50 + "\n")

    try:
        app.run(host=pargs.host, port=pargs.port, debug=False, use_reloader=False)
    finally:
        if browser is not None:
            run_on_main_loop(browser.close())
    return 0
