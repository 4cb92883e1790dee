from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union
import configparser

SECTION = 'Decoder'


@dataclass(frozen=True)
class DecoderOptions:
    """Settings shared by the decoder and the loader"""
    strict_singletons: bool = False
    encoding: str = 'utf-8'
    file_patterns: Tuple[str, ...] = ('*.qfx', '*.ofx')


def load_options(config_file: Optional[Union[str, Path]] = None) -> DecoderOptions:
    """
    Read decoder options from a properties file.

        [Decoder]
        strict_singletons = true
        encoding = cp1252
        file_patterns = *.qfx, *.ofx

    A missing file, section or key falls back to the defaults.

    Raises:
        ValueError: If strict_singletons is not a boolean
    """
    defaults = DecoderOptions()
    if config_file is None:
        return defaults

    config = configparser.ConfigParser()
    config.read(config_file)

    if SECTION not in config:
        return defaults
    section = config[SECTION]

    patterns = section.get('file_patterns', '').strip()
    if patterns:
        file_patterns = tuple(p.strip() for p in patterns.split(',') if p.strip())
    else:
        file_patterns = defaults.file_patterns

    return DecoderOptions(
        strict_singletons=section.getboolean('strict_singletons', fallback=defaults.strict_singletons),
        encoding=section.get('encoding', defaults.encoding).strip() or defaults.encoding,
        file_patterns=file_patterns,
    )
