"""AI-powered body-composition report extractor."""

import json
from pathlib import Path
from typing import Any

from bodycomp.ai.client_base import BaseChatClient
from bodycomp.ai.exceptions import AIClientError
from bodycomp.ai.prompt_loader import load_prompt
from bodycomp.extraction.base import BaseExtractor
from bodycomp.extraction.exceptions import ExtractionError
from bodycomp.extraction.models import PartialReading, ReportImage
from bodycomp.extraction.validator import validate_and_build
from bodycomp.logging.logger import Log

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


class Extractor(BaseExtractor):
    """Sends a report image to a vision model and reads the fields it returns."""

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.0,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = load_prompt(
            system_prompt_path or _DEFAULT_PROMPT_DIR / "extraction_system_prompt.txt",
            ExtractionError,
        )
        self._user_prompt = load_prompt(
            user_prompt_path or _DEFAULT_PROMPT_DIR / "extraction_user_prompt.txt",
            ExtractionError,
        )

    def extract(self, image: ReportImage) -> PartialReading:
        Log.debug(f"Extraction request: {len(image.data)} bytes of {image.mime_type}")
        try:
            raw_response = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=self._user_prompt,
                image_url=image.to_data_url(),
                json_mode=True,
            )
        except AIClientError as exc:
            raise ExtractionError(f"Extraction call failed: {exc}") from exc
        Log.debug(f"AI raw response:\n{raw_response}")

        reading = validate_and_build(self._parse_json(raw_response))
        Log.info(f"Extraction complete: {len(reading.filled_fields())} fields read")
        return reading

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed
