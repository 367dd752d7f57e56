"""Free-text narratives about readings, produced by a chat model."""

import json
from pathlib import Path

from bodycomp.ai.client_base import BaseChatClient
from bodycomp.ai.exceptions import AIClientError
from bodycomp.ai.prompt_loader import load_prompt
from bodycomp.extraction.models import PartialReading
from bodycomp.insights.exceptions import InsightError
from bodycomp.logging.logger import Log
from bodycomp.measurements.models import Subject
from bodycomp.measurements.summary import SubjectSummary
from bodycomp.scoring.models import OverallScore

_PROMPT_DIR = Path(__file__).parent / "prompts"


class _NarrativeService:
    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float,
        system_prompt_file: str,
        user_prompt_file: str,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._system_prompt = load_prompt(_PROMPT_DIR / system_prompt_file, InsightError)
        self._user_template = load_prompt(_PROMPT_DIR / user_prompt_file, InsightError)

    def _complete(self, user_prompt: str) -> str:
        Log.debug(f"Insight prompt:\n{user_prompt}")
        try:
            text = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=user_prompt,
            )
        except AIClientError as exc:
            raise InsightError(f"Insight call failed: {exc}") from exc
        return text.strip()


class InsightGenerator(_NarrativeService):
    """Nutritionist-style commentary on a single reading."""

    def __init__(self, *, client: BaseChatClient, model: str, temperature: float = 0.3) -> None:
        super().__init__(
            client=client,
            model=model,
            temperature=temperature,
            system_prompt_file="reading_system_prompt.txt",
            user_prompt_file="reading_user_prompt.txt",
        )

    def generate(self, subject: Subject, reading: PartialReading, overall: OverallScore) -> str:
        """Raises InsightError when the model call fails."""
        payload = {k: v for k, v in reading.to_payload().items() if v is not None}
        prompt = self._user_template.format(
            subject=subject.describe(),
            overall_score=overall.score,
            overall_label=overall.label,
            reading_json=json.dumps(payload, indent=2),
        )
        text = self._complete(prompt)
        Log.info(f"Generated {len(text)} chars of insights", subject_id=subject.id)
        return text


class ComparisonAnalyzer(_NarrativeService):
    """Comparative commentary on two subjects' progress."""

    def __init__(self, *, client: BaseChatClient, model: str, temperature: float = 0.3) -> None:
        super().__init__(
            client=client,
            model=model,
            temperature=temperature,
            system_prompt_file="comparison_system_prompt.txt",
            user_prompt_file="comparison_user_prompt.txt",
        )

    def compare(self, first: SubjectSummary, second: SubjectSummary) -> str:
        prompt = self._user_template.format(
            first=first.to_prompt_block(),
            second=second.to_prompt_block(),
            first_name=first.name,
            second_name=second.name,
        )
        text = self._complete(prompt)
        Log.info(f"Generated {len(text)} chars of comparison insights")
        return text
