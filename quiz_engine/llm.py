import logging

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from .errors import ServiceError

logger = logging.getLogger(__name__)

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
}


class GeminiTextModel:
    """Text-in, text-out wrapper around a Gemini generative model."""

    def __init__(self, api_key: str, model_name: str, temperature: float):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(
            model_name,
            safety_settings=SAFETY_SETTINGS,
            generation_config=genai.types.GenerationConfig(temperature=temperature),
        )

    def generate(self, prompt: str) -> str:
        try:
            response = self.model.generate_content(prompt)
            # .text raises ValueError when the reply was blocked or has no parts
            text = response.text
        except Exception as e:
            logger.error("Gemini call to %s failed: %s", self.model_name, e)
            raise ServiceError(str(e) or "Gemini API request failed.") from e
        if not text or not text.strip():
            raise ServiceError("Gemini returned an empty response.")
        return text
