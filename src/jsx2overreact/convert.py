import time
from typing import Optional

from jsx2overreact.logger import logger
from jsx2overreact.parser import parse
from jsx2overreact.renderer import Renderer
from jsx2overreact.settings import ConverterSettings


def convert(source: str, settings: Optional[ConverterSettings] = None) -> str:
    """
    Convert JSX *source* (optionally embedded in a small script) into
    OverReact builder code.

    Raises ``ParseError`` for invalid source and ``UnsupportedConstruct`` for
    constructs without a rendering rule; partial output is never returned.
    """
    settings = settings or ConverterSettings()
    started = time.perf_counter()

    program = parse(source, settings)
    output = Renderer(settings.render).render(program)
    output = output.rstrip(settings.render.line_end)

    logger.debug(
        "Converted source",
        statements=len(program.body),
        input_size=len(source),
        output_size=len(output),
        duration=f"{time.perf_counter() - started:.4f}s",
    )
    return output
