# src/composer/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, Optional

from .core import NodeHandler, StyleRule, TagDefinition

logger = logging.getLogger(__name__)


class TagRegistry:
    """
    Central registry mapping tag names to their style exceptions and node handlers.

    Dynamically discovers TagDefinition objects from the 'composer.dom.elements'
    package, so a new tag behavior is one new module rather than another branch
    in the converter.
    """

    _definitions: Dict[str, TagDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers every DEFINITION found in the modules of 'composer.dom.elements'.
        Safe to call repeatedly; discovery runs once per process.
        """
        if cls._loaded:
            return

        try:
            import composer.dom.elements as elements_pkg

            for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
                full_name = f"composer.dom.elements.{name}"
                try:
                    module = importlib.import_module(full_name)
                    definition = getattr(module, "DEFINITION", None)
                    if isinstance(definition, TagDefinition):
                        cls.register(definition)
                        logger.debug("Tag definition loaded: %s", ", ".join(definition.tag_names))
                except Exception as e:
                    logger.error("Error loading tag module %s: %s", name, e)

            cls._loaded = True
        except ImportError as e:
            logger.error("Could not find elements package: %s", e)

    @classmethod
    def register(cls, definition: TagDefinition) -> None:
        for tag in definition.tag_names:
            if tag in cls._definitions:
                logger.warning("Tag <%s> registered twice; the later definition wins.", tag)
            cls._definitions[tag] = definition

    @classmethod
    def get(cls, tag: str) -> Optional[TagDefinition]:
        return cls._definitions.get(tag.lower())

    @classmethod
    def get_style_rule(cls, tag: str) -> Optional[StyleRule]:
        definition = cls.get(tag)
        return definition.style_rule if definition else None

    @classmethod
    def get_node_handler(cls, tag: str) -> Optional[NodeHandler]:
        definition = cls.get(tag)
        return definition.node_handler if definition else None

    @classmethod
    def is_terminal(cls, tag: str) -> bool:
        definition = cls.get(tag)
        return bool(definition and definition.terminal)

    @classmethod
    def registered_tags(cls) -> list:
        return sorted(cls._definitions)
