from dts2re.translator import (
    TranslatorError,
    parse_declarations,
    translate,
    translate_file,
    translate_source,
)

__version__ = "0.1.0"


__all__ = [
    "TranslatorError",
    "parse_declarations",
    "translate",
    "translate_file",
    "translate_source",
]
