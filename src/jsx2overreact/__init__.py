from jsx2overreact.convert import convert
from jsx2overreact.errors import ConversionError, ParseError, UnsupportedConstruct
from jsx2overreact.parser import parse
from jsx2overreact.renderer import Renderer, render
from jsx2overreact.settings import (
    ConverterSettings,
    RenderSettings,
    UnsupportedPolicy,
    load_settings,
)

__all__ = [
    "convert",
    "parse",
    "render",
    "Renderer",
    "ConversionError",
    "ParseError",
    "UnsupportedConstruct",
    "ConverterSettings",
    "RenderSettings",
    "UnsupportedPolicy",
    "load_settings",
]
