# src/composer/model.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from composer.style.engine import StyleMode


class ConverterSettings(BaseModel):
    """Runtime switches for one converter instance, usually built from settings.json."""
    style_mode: StyleMode = StyleMode.UA_DIFF_PLUS_INHERITED
    correlation_attribute: str = "data-figma-id"
    skip_tags: List[str] = Field(default_factory=lambda: ["script", "style", "noscript", "template"])
    rich_text_components: List[str] = Field(default_factory=lambda: ["richTextEditor", "htmlRte"])
    trace: bool = False
    trace_classes: List[str] = Field(default_factory=list)
