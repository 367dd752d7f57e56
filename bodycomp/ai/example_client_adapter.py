"""Offline chat client.

Returns canned replies without network calls. Used for local development
and as a template for new provider adapters: implement BaseChatClient and
register the provider in ChatClientFactory.
"""

import json
from typing import ClassVar

from bodycomp.ai.client_base import BaseChatClient


class ExampleChatClient(BaseChatClient):
    """Returns a fixed extraction payload for image requests and fixed text otherwise."""

    EXTRACTION_RESPONSE: ClassVar[dict[str, object]] = {
        "measurement_date": None,
        "weight": 80.0,
        "bmi": 24.0,
        "body_fat_percent": 18.0,
        "muscle_rate_percent": 36.0,
        "visceral_fat": 8,
        "body_water_percent": 58.0,
        "protein_percent": 17.5,
        "bone_mass": 3.1,
        "bmr": 1750,
    }
    NARRATIVE_RESPONSE: ClassVar[str] = "No insights available in offline mode."

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        image_url: str | None = None,
        json_mode: bool = False,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        if image_url is not None or json_mode:
            return json.dumps(self.EXTRACTION_RESPONSE)
        return self.NARRATIVE_RESPONSE
