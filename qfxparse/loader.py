from pathlib import Path
from typing import Dict, List, Optional, Union

from qfxparse.config import DecoderOptions
from qfxparse.decoder import ENVELOPE_TAG, decode
from qfxparse.errors import QFXFileNotFoundError, QFXFileReadError, QFXParsingError, UnexpectedTokenError
from qfxparse.logging_config import get_logger
from qfxparse.models import QFXDocument

logger = get_logger(__name__)


def locate_envelope(content: str) -> str:
    """
    Return the document from the <OFX> tag onwards.

    Header lines before the envelope (OFXHEADER:100, DATA:OFXSGML, or an
    XML prolog) are dropped without validation.

    Raises:
        UnexpectedTokenError: If there is no <OFX> tag
    """
    start_index = content.find(f"<{ENVELOPE_TAG}>")
    if start_index == -1:
        raise UnexpectedTokenError(
            ENVELOPE_TAG,
            message=f"Could not find the <{ENVELOPE_TAG}> tag in the file",
        )
    return content[start_index:]


class QFXLoader:
    """Reads QFX/OFX files from disk and decodes them"""

    def __init__(self, base_path: str = "financial-data", subfolder: str = "",
                 options: Optional[DecoderOptions] = None):
        """
        Initialize the loader

        Args:
            base_path: Base directory containing account folders
            subfolder: Name of the subfolder containing QFX/OFX files
            options: Decoder options, defaults when omitted
        """
        self.base_path = Path(base_path) / subfolder
        self.options = options or DecoderOptions()

    def read_text(self, file_path: Union[str, Path]) -> str:
        """Read a file with the configured encoding"""
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding=self.options.encoding) as file:
                return file.read()
        except FileNotFoundError as e:
            raise QFXFileNotFoundError(str(file_path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise QFXFileReadError(str(file_path), str(e)) from e

    def load_file(self, file_path: Union[str, Path]) -> QFXDocument:
        """
        Decode a single file.

        Raises:
            QFXParsingError: If the file cannot be read or decoded
        """
        content = self.read_text(file_path)
        document = decode(locate_envelope(content), self.options)
        logger.info(
            "Decoded file",
            file=str(file_path),
            transactions=sum(1 for _ in document.transactions()),
        )
        return document

    def statement_files(self) -> List[Path]:
        """Files in the folder matching the configured patterns, sorted"""
        files = set()
        for pattern in self.options.file_patterns:
            files.update(p for p in self.base_path.glob(pattern) if p.is_file())
        return sorted(files)

    def load_all(self) -> Dict[Path, QFXDocument]:
        """
        Decode every statement file in the folder.

        Files that fail to decode are logged and skipped.
        """
        documents = {}

        if not self.base_path.exists():
            logger.warning("Statement folder not found", folder=str(self.base_path))
            return documents

        for file_path in self.statement_files():
            try:
                documents[file_path] = self.load_file(file_path)
            except QFXParsingError as e:
                logger.error("Skipping file", file=str(file_path), error=str(e), error_type=type(e).__name__)

        return documents
