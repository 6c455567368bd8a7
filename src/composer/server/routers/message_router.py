import logging
from flask import Blueprint, jsonify, request, current_app

from composer.utils.loop_runner import run_on_main_loop

logger = logging.getLogger(__name__)

message_router = Blueprint('message_router', __name__)

SOURCE_HEADER = 'X-Composer-Source'
PARENT_SOURCE = 'parent'


# --- HELPER FUNCTION ---

def get_message_handler():
    """Retrieves the message handler from the Flask application context."""
    handler = current_app.config.get('MESSAGE_HANDLER')
    if not handler:
        raise RuntimeError("MessageHandler is not set in app.config['MESSAGE_HANDLER']")
    return handler


# --- API ROUTES ---

@message_router.route('/messages', methods=['POST'])
def post_message():
    """
    Accepts one cross-window message. Replies 200 with the response message,
    or 204 when the message was ignored.
    """
    handler = get_message_handler()
    message = request.get_json(silent=True)
    origin = request.headers.get('Origin')
    from_parent = request.headers.get(SOURCE_HEADER, '').lower() == PARENT_SOURCE

    try:
        reply = run_on_main_loop(handler.handle_message(message, origin, from_parent))
    except Exception as e:
        logger.error(f"Error handling message: {e}", exc_info=True)
        return jsonify({"type": "html-to-json-error", "error": str(e)}), 500

    if reply is None:
        return '', 204
    return jsonify(reply)


@message_router.route('/health', methods=['GET'])
def health():
    handler = get_message_handler()
    return jsonify({
        "status": "ok",
        "hasResult": handler.controller.session.has_result(),
    })
