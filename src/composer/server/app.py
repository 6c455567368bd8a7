"""
Composer bridge server.
Flask application exposing the cross-window message contract over HTTP.
"""

import logging
from flask import Flask

from composer.server.routers.message_router import message_router
from composer.services.message_service import MessageHandler

logger = logging.getLogger(__name__)


def create_app(handler: MessageHandler) -> Flask:
    """
    Application factory; the message handler is injected into the app config
    for blueprint access.
    """
    flask_app = Flask(__name__)
    flask_app.config['MESSAGE_HANDLER'] = handler
    flask_app.register_blueprint(message_router, url_prefix='/api')
    return flask_app
