"""Centralised settings for newsdigest.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from newsdigest.markdown.models import ExtractionBudget

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Extraction budget
    # ------------------------------------------------------------------
    max_depth: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_DEPTH", "50"))
    )
    max_text_node_length: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_TEXT_NODE_LENGTH", "10000"))
    )
    max_code_block_length: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_CODE_BLOCK_LENGTH", "50000"))
    )
    max_output_line_length: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_OUTPUT_LINE_LENGTH", "50000"))
    )

    # ------------------------------------------------------------------
    # Source parsers
    # ------------------------------------------------------------------
    min_content_length: int = field(
        default_factory=lambda: int(os.environ.get("MIN_CONTENT_LENGTH", "50"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "WARNING").upper()
    )

    def extraction_budget(self) -> ExtractionBudget:
        """Build an :class:`ExtractionBudget` from the current settings.

        Raises:
            ValueError: If any configured limit is out of range.
        """
        from newsdigest.markdown.models import ExtractionBudget  # noqa: PLC0415

        return ExtractionBudget(
            max_depth=self.max_depth,
            max_text_node_length=self.max_text_node_length,
            max_code_block_length=self.max_code_block_length,
            max_output_line_length=self.max_output_line_length,
        )


# Module-level singleton; import this everywhere:
#   from newsdigest.config import settings
settings = Settings()
